"""WebDriverClientLibrary - Robot Framework keywords for the WebDriver client."""

from webdriverclient.lib.WebDriverClientLibrary import WebDriverClientLibrary

__all__ = ["WebDriverClientLibrary"]
