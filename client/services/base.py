from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from client.app import ClientApp


class ServiceBase:
    """Base for services that talk to the dictionary through the app's lookup client."""

    def __init__(self, app: "ClientApp") -> None:
        self.app = app
