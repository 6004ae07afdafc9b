"""User name and picture display."""

from markupsafe import Markup

from scheduler_renderer.models.scheduler import UserRef
from scheduler_renderer.services.strings import CatalogStringLookup
from scheduler_renderer.services.urls import SiteUrlBuilder

PICTURE_SIZE = 35


class DefaultUserFormatter:
    """Formats names as "first last" and pictures as profile-linked thumbnails."""

    def __init__(self, urls: SiteUrlBuilder, strings: CatalogStringLookup):
        self.urls = urls
        self.strings = strings

    def fullname(self, user: UserRef) -> str:
        return " ".join(part for part in (user.firstname, user.lastname) if part)

    def user_picture(self, user: UserRef, course_id: int | None = None) -> Markup:
        if user.picture:
            src = self.urls.url(f"/user/pix.php/{user.id}/f2.jpg")
        else:
            src = self.urls.url("/pix/u/f2.png")
        alt = user.imagealt or self.strings.get_string("pictureof", "moodle", self.fullname(user))
        profile = self.urls.url("/user/view.php", {"id": user.id, "course": course_id})

        return Markup(
            '<a href="{}"><img src="{}" alt="{}" title="{}" class="userpicture"'
            ' width="{}" height="{}" /></a>'
        ).format(profile, src, alt, alt, PICTURE_SIZE, PICTURE_SIZE)
