"""Shared fixtures for starterkit tests."""

from collections import deque
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from integrations.notifications import DeliveryReport
from package_managers.base import PackageManager
from schemas.product import Product


class FakePrompter:
    """Prompter answering from scripted queues and recording every question."""

    def __init__(self, selects=(), confirms=(), texts=()):
        self.selects = deque(selects)
        self.confirms = deque(confirms)
        self.texts = deque(texts)
        self.calls: list[tuple[str, str]] = []

    def select(self, message, choices, default=None):
        self.calls.append(("select", message))
        self.last_choices = list(choices)
        answer = self.selects.popleft()
        return answer(self.last_choices) if callable(answer) else answer

    def confirm(self, message, default=True):
        self.calls.append(("confirm", message))
        return self.confirms.popleft()

    def text(self, message, error_message="Value must not be empty."):
        self.calls.append(("text", message))
        return self.texts.popleft()

    def messages(self, kind: str) -> list[str]:
        return [message for call_kind, message in self.calls if call_kind == kind]


class FakeHandle:
    def __init__(self, exit_code: int = 0, error: Exception | None = None):
        self.exit_code = exit_code
        self.error = error

    def wait(self) -> int:
        if self.error is not None:
            raise self.error
        return self.exit_code


class FakePackageManager(PackageManager):
    """Package manager that never spawns a process."""

    name = "npm"
    executable = "npm"

    def __init__(self, handle: FakeHandle | None = None):
        self.handle = handle or FakeHandle(0)
        self.init_calls: list[Path] = []

    def init_args(self) -> list[str]:
        return ["init"]

    def install_args(self) -> list[str]:
        return ["install"]

    def init(self, cwd: Path) -> FakeHandle:
        self.init_calls.append(cwd)
        return self.handle


@pytest.fixture
def prompter():
    return FakePrompter()


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(productId=None, productTitle="react Starter", productSlug="react-starter", available=True),
        Product(productId=42, productTitle="Admin Pro", productSlug="admin-pro", available=False),
        Product(productId=7, productTitle="angular Pro", productSlug="angular-pro", available=True),
    ]


@pytest.fixture
def catalog(products):
    catalog = MagicMock()
    catalog.fetch_catalog.return_value = list(products)
    return catalog


@pytest.fixture
def notifier():
    notifier = MagicMock()
    notifier.notify.return_value = DeliveryReport(delivered=True)
    return notifier
