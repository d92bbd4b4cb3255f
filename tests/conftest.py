"""
Shared fixtures: host services that never touch the real machine, and a
capture of logged warnings
"""

import pytest
from loguru import logger

from mexpand.lib.host import HostServices


class FakeHost:
    """Records exec commands and serves env/clipboard/files from dicts"""

    def __init__(self, env=None, clipboard=None, commands=None, files=None):
        self.env = env or {}
        self.clipboard = clipboard
        self.commands = commands or {}
        self.files = files or {}
        self.ran = []

    def env_get(self, name):
        return self.env.get(name)

    def clipboard_read(self):
        return self.clipboard

    def command_run(self, command):
        self.ran.append(command.strip())
        return self.commands.get(command.strip())

    def file_read(self, path):
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def services(self) -> HostServices:
        return HostServices(
            env_get=self.env_get,
            clipboard_read=self.clipboard_read,
            command_run=self.command_run,
            file_read=self.file_read,
        )


@pytest.fixture
def fake_host():
    """Factory: fake_host(env=..., clipboard=..., commands=..., files=...) -> FakeHost"""
    return FakeHost


@pytest.fixture
def warnings_log():
    """Messages logged at WARNING or above while the test runs"""
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="WARNING",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)
