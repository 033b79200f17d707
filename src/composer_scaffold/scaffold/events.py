"""
Lifecycle events fired around the file operations.
"""

from __future__ import annotations

import logging
import subprocess
from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from .operations import ScaffoldError

logger = logging.getLogger(__name__)

PRE_SCAFFOLD_CMD = "pre-composer-scaffold-cmd"
POST_SCAFFOLD_CMD = "post-composer-scaffold-cmd"

Listener = Callable[[str], None]


class ScriptError(ScaffoldError):
    """Raised when a project script bound to an event exits with an error."""


class EventDispatcher:
    """
    Dispatches named events to Python listeners and to project scripts.

    Scripts come from the `scripts` section of the root project; each one is a
    shell command run from the project root.
    """

    def __init__(
        self,
        scripts: Optional[Mapping[str, Union[str, Sequence[str]]]] = None,
        *,
        cwd: Optional[Path] = None,
    ) -> None:
        self.cwd = cwd
        self._scripts = dict(scripts or {})
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def add_listener(self, event: str, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def commands_for(self, event: str) -> List[str]:
        commands = self._scripts.get(event) or []
        if isinstance(commands, str):
            return [commands]
        return list(commands)

    def dispatch(self, event: str) -> int:
        """
        Fire an event. Listeners run first, then scripts, each in declaration order.

        Returns:
            Number of listeners and scripts that ran.

        Raises:
            ScriptError: If a script exits with a non-zero status.
        """
        handled = 0
        for listener in list(self._listeners.get(event, [])):
            listener(event)
            handled += 1
        for command in self.commands_for(event):
            self._run_script(event, command)
            handled += 1
        if handled:
            logger.debug("Dispatched %s to %d handler(s)", event, handled)
        return handled

    def _run_script(self, event: str, command: str) -> None:
        logger.info("> %s: %s", event, command)
        proc = subprocess.run(command, shell=True, cwd=self.cwd, check=False)
        if proc.returncode != 0:
            raise ScriptError(
                f"Script {command!r} handling the {event} event returned with error code {proc.returncode}"
            )
