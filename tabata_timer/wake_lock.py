import os
import sys
import shutil
import logging
import subprocess

logger = logging.getLogger(__name__)

# SetThreadExecutionState flags
ES_CONTINUOUS = 0x80000000
ES_DISPLAY_REQUIRED = 0x00000002


class WakeLockManager:
    """Keeps the display awake while a workout runs.

    Windows uses SetThreadExecutionState, macOS a `caffeinate` child process
    and Linux a `systemd-inhibit` child process. Anything else is a no-op.
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._held = False
        self._process = None

    @property
    def held(self) -> bool:
        return self._held

    def acquire(self):
        if self._held or not self.enabled:
            return
        try:
            if sys.platform == "win32":
                self._held = self._set_execution_state(ES_CONTINUOUS | ES_DISPLAY_REQUIRED)
            else:
                command = self._inhibit_command()
                if command is None:
                    logger.info("Wake lock not supported on %s", sys.platform)
                    return
                self._process = subprocess.Popen(
                    command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL
                )
                self._held = True
        except (OSError, AttributeError) as e:
            logger.warning("Failed to acquire wake lock: %s", e)
            self._process = None
            self._held = False
        if self._held:
            logger.info("Wake lock acquired, screen will stay on during workout")

    def release(self):
        if not self._held:
            return
        self._held = False
        try:
            if sys.platform == "win32":
                self._set_execution_state(ES_CONTINUOUS)
            elif self._process is not None:
                self._process.terminate()
                try:
                    self._process.wait(timeout=2)
                except subprocess.TimeoutExpired:
                    self._process.kill()
        except (OSError, AttributeError) as e:
            logger.warning("Failed to release wake lock: %s", e)
        finally:
            self._process = None
        logger.info("Wake lock released")

    @staticmethod
    def _set_execution_state(flags: int) -> bool:
        import ctypes
        previous = ctypes.windll.kernel32.SetThreadExecutionState(flags)
        if not previous:
            logger.warning("SetThreadExecutionState rejected flags %#x", flags)
        return bool(previous)

    @staticmethod
    def _inhibit_command():
        if sys.platform == "darwin" and shutil.which("caffeinate"):
            return ["caffeinate", "-d", "-w", str(os.getpid())]
        if sys.platform.startswith("linux") and shutil.which("systemd-inhibit"):
            return [
                "systemd-inhibit",
                "--what=idle",
                "--who=Tabata Timer",
                "--why=Workout in progress",
                "--mode=block",
                "sleep", "infinity",
            ]
        return None
