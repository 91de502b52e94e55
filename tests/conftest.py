from __future__ import annotations

import concurrent.futures as _futures

import pytest

from app_deploy.objects import DeployContext


class FakeLauncher:
    """Records launch calls; settles each returned future immediately unless deferred."""

    def __init__(self, error: BaseException | None = None, defer: bool = False, raises: BaseException | None = None):
        self.error = error
        self.defer = defer
        self.raises = raises
        self.calls: list[tuple[str, list[str], bool]] = []
        self.futures: list[_futures.Future] = []

    def __call__(self, target, app=None, wait=False):
        self.calls.append((target, list(app or []), wait))
        if self.raises is not None:
            raise self.raises
        future: _futures.Future = _futures.Future()
        self.futures.append(future)
        if not self.defer:
            self.settle(future)
        return future

    def settle(self, future: _futures.Future) -> None:
        if self.error is not None:
            future.set_exception(self.error)
        else:
            future.set_result(0)


class Recorder:
    """Collects (callback name, event args) in call order."""

    def __init__(self):
        self.events: list[tuple[str, object]] = []

    def hook(self, name: str, raises: dict | None = None):
        def _callback(sender, e):
            self.events.append((name, e))
            if raises and getattr(e, "file", None) in raises:
                raise raises[e.file]

        return _callback

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[object]:
        return [e for n, e in self.events if n == name]


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def workspace_root(tmp_path):
    return str(tmp_path)


@pytest.fixture
def ctx(workspace_root, launcher):
    return DeployContext(workspace_root=workspace_root, launcher=launcher)


@pytest.fixture
def recorder():
    return Recorder()
