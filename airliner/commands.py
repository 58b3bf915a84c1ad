"""Command objects and the service that runs them."""

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from .clipboard import Clipboard, MemoryClipboard, SystemClipboard
from .constants import AirlinerConstants
from .cut_to_eol import CutToEol
from .hungry_backspace import HungryBackspace
from .kill_timer import KillAccrualTimer
from .settings import SettingsPersistence, get_persistence
from .view import ViewProvider

logger = logging.getLogger(__name__)


class EditorCommand(ABC):
    """Base class for editing commands."""

    name: str = ""

    @abstractmethod
    def execute(self, service: 'EditorService') -> Any:
        """Execute the command against the service's active view.

        Returns:
            Command-specific result, None if there was no active view.
        """
        pass


class HungryBackspaceCommand(EditorCommand):
    name = AirlinerConstants.HUNGRY_BACKSPACE

    def execute(self, service):
        return service.backspace_engine.execute()


class CutToEolCommand(EditorCommand):
    name = AirlinerConstants.CUT_TO_EOL

    def execute(self, service):
        return service.cut_engine.execute()


class CommandRegistry:
    """Registry mapping command names to commands."""

    def __init__(self):
        self._commands: Dict[str, EditorCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        self.register(HungryBackspaceCommand())
        self.register(CutToEolCommand())

    def register(self, command: EditorCommand):
        """Register ``command`` under its name, replacing any existing one."""
        self._commands[command.name] = command

    def get(self, name: str) -> EditorCommand:
        """Return the command registered as ``name``.

        Raises:
            KeyError: If no such command exists.
        """
        try:
            return self._commands[name]
        except KeyError:
            raise KeyError(f"Unknown command: {name}") from None

    def names(self) -> List[str]:
        return sorted(self._commands)


class EditorService:
    """Owns the editing collaborators and runs commands one at a time.

    All commands execute on a single worker thread in submission order,
    so an invocation finishes (context, decision, edit, clipboard) before
    the next one starts.
    """

    def __init__(self, provider: ViewProvider, clipboard: Optional[Clipboard] = None,
                 timer: Optional[KillAccrualTimer] = None, window_ms: Optional[int] = None,
                 registry: Optional[CommandRegistry] = None):
        if timer is not None and window_ms is not None:
            raise ValueError("Pass either timer or window_ms, not both")
        if timer is None:
            if window_ms is None:
                window_ms = AirlinerConstants.ACCRUE_WINDOW_MS
            timer = KillAccrualTimer(window_ms)

        self.provider = provider
        self.clipboard = clipboard if clipboard is not None else SystemClipboard()
        self.registry = registry if registry is not None else CommandRegistry()
        self.backspace_engine = HungryBackspace(provider)
        self.cut_engine = CutToEol(provider, self.clipboard, timer)
        self._worker: Optional[threading.Thread] = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="airliner",
            initializer=self._register_worker,
        )

    @classmethod
    def from_settings(cls, provider: ViewProvider,
                      persistence: Optional[SettingsPersistence] = None,
                      clipboard: Optional[Clipboard] = None) -> 'EditorService':
        """Build a service configured from persisted settings.

        Args:
            provider: Supplies the active view.
            persistence: Settings source; defaults to the shared one.
            clipboard: Overrides the ``use_system_clipboard`` setting.

        Returns:
            A new service using the stored accrual window.
        """
        if persistence is None:
            persistence = get_persistence()
        settings = persistence.load_settings()
        if clipboard is None:
            clipboard = SystemClipboard() if settings["use_system_clipboard"] else MemoryClipboard()
        return cls(provider, clipboard=clipboard, window_ms=settings["accrue_window_ms"])

    @property
    def timer(self) -> KillAccrualTimer:
        return self.cut_engine.timer

    def _register_worker(self):
        self._worker = threading.current_thread()

    def submit(self, name: str) -> Future:
        """Queue the command ``name`` on the worker thread.

        Returns:
            A future holding the command's result or error.

        Raises:
            KeyError: If no such command is registered.
        """
        command = self.registry.get(name)
        logger.debug(f"Queueing command {name}")
        return self._executor.submit(command.execute, self)

    def run(self, name: str) -> Any:
        """Run the command ``name`` and wait for it to finish.

        Returns:
            The command's result.

        Raises:
            KeyError: If no such command is registered.
            RuntimeError: If called from inside a running command.
        """
        if threading.current_thread() is self._worker:
            raise RuntimeError("Commands cannot be run from within a running command")
        return self.submit(name).result()

    def hungry_backspace(self):
        return self.run(AirlinerConstants.HUNGRY_BACKSPACE)

    def cut_to_eol(self):
        return self.run(AirlinerConstants.CUT_TO_EOL)

    def shutdown(self, wait: bool = True):
        """Stop the worker; queued commands still run."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> 'EditorService':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
