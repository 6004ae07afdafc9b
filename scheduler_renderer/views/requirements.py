"""Collector for the client-side modules a rendered page needs."""

from typing import Any

from scheduler_renderer.models.base_models import JsModuleCall

STUDENTLIST_MODULE = "mod_scheduler/studentlist"
LIMITCHOICES_MODULE = "mod_scheduler/limitchoices"
SAVESEEN_MODULE = "mod_scheduler/saveseen"


class PageRequirements:
    """Records JavaScript module initialisations requested during one render pass."""

    def __init__(self):
        self._calls: list[JsModuleCall] = []

    def js_init_call(self, module: str, args: list[Any], function: str = "init") -> None:
        call = JsModuleCall(module=module, function=function, args=args)
        if call not in self._calls:
            self._calls.append(call)

    @property
    def calls(self) -> list[JsModuleCall]:
        return list(self._calls)
