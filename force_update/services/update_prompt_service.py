import asyncio
import logging
import sys
import webbrowser
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from force_update.services.platform_service import PlatformService

logger = logging.getLogger(__name__)

DEFAULT_DIALOG_TITLE = 'Required Update'
DEFAULT_DIALOG_MESSAGE = (
    'A critical update is required to continue using the app. '
    'Please update now to the latest version.'
)
DEFAULT_UPDATE_BUTTON_TEXT = 'Update Now'
DEFAULT_LATER_BUTTON_TEXT = 'later'

UpdateAction = Callable[[], Awaitable[None]]
LaterAction = Callable[[], None]


@dataclass(frozen=True)
class UpdatePrompt:
    """Everything a renderer needs to display the update prompt."""
    title: str
    message: str
    update_button_text: str
    later_button_text: str
    store_url: str
    dismissible: bool = False


class PromptRenderer(ABC):
    """Displays an update prompt in a platform-appropriate style."""

    @abstractmethod
    async def show(self, prompt: UpdatePrompt, on_update: UpdateAction, on_later: Optional[LaterAction]) -> None:
        """
        Display the prompt and dispatch the user's choice.

        Args:
            prompt: Texts and store URL to display
            on_update: Called when the user confirms the update
            on_later: Called when the user dismisses; None for a hard update
        """
        pass


class ConsolePromptRenderer(PromptRenderer):
    """Renders the prompt in a terminal."""

    def __init__(self, input_fn: Callable[[str], str] = input, output_fn: Callable[[str], None] = print):
        self._input = input_fn
        self._output = output_fn

    async def show(self, prompt: UpdatePrompt, on_update: UpdateAction, on_later: Optional[LaterAction]) -> None:
        self._output(prompt.title)
        self._output(prompt.message)

        if on_later is None:
            try:
                await asyncio.to_thread(self._input, f"Press Enter to {prompt.update_button_text.lower()}... ")
            except EOFError:
                logger.warning("No input available, leaving the update prompt unanswered")
                return
            await on_update()
            return

        self._output(f"  [1] {prompt.update_button_text}")
        self._output(f"  [2] {prompt.later_button_text}")
        while True:
            try:
                choice = (await asyncio.to_thread(self._input, "> ")).strip()
            except EOFError:
                logger.warning("No input available, treating the update prompt as dismissed")
                on_later()
                return
            if choice == '1':
                await on_update()
                return
            if choice == '2':
                on_later()
                return
            self._output("Please enter 1 or 2.")


class UrlLauncher:
    """Opens URLs in an external application."""

    async def open_external(self, url: str) -> bool:
        opened = await asyncio.to_thread(webbrowser.open, url)
        if not opened:
            logger.warning(f"No application available to open {url}")
        return opened


class UpdatePromptService:
    """Shows the update prompt and sends the user to the store."""

    def __init__(
        self,
        renderer: PromptRenderer,
        launcher: Optional[UrlLauncher] = None,
        platform_service: Optional[PlatformService] = None,
        exit_handler: Callable[[int], None] = sys.exit,
    ):
        self.renderer = renderer
        self.launcher = launcher or UrlLauncher()
        self.platform_service = platform_service or PlatformService()
        self._exit = exit_handler

    async def perform_force_update(
        self,
        android_store_url: str,
        ios_store_url: str,
        dismissible: Optional[bool] = None,
        dialog_title: str = DEFAULT_DIALOG_TITLE,
        dialog_message: str = DEFAULT_DIALOG_MESSAGE,
        update_button_text: str = DEFAULT_UPDATE_BUTTON_TEXT,
        later_button_text: str = DEFAULT_LATER_BUTTON_TEXT,
    ) -> None:
        """
        Display the update prompt.

        Call this only after a check reported that an update is required.
        Confirming opens the store and exits the process. The "later" option
        is offered only when ``dismissible`` is true.
        """
        store_url = ios_store_url if self.platform_service.is_ios() else android_store_url
        prompt = UpdatePrompt(
            title=dialog_title,
            message=dialog_message,
            update_button_text=update_button_text,
            later_button_text=later_button_text,
            store_url=store_url,
            dismissible=bool(dismissible),
        )

        async def on_update() -> None:
            logger.info(f"Opening store page {store_url}")
            await self.launcher.open_external(store_url)
            self._exit(0)

        def on_later() -> None:
            logger.info("Update prompt dismissed")

        await self.renderer.show(prompt, on_update, on_later if prompt.dismissible else None)
