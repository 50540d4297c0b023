import io
import logging
from typing import Callable, Dict, Optional

import pytest

from hwreport.config import ReportConfig
from hwreport.report.context import ChipContext
from hwreport.sensors import ChipName, Feature, MemoryBackend

CHIP = ChipName(prefix="it8718", address="isa-0290", adapter="ISA adapter")


@pytest.fixture(autouse=True)
def propagate_hwreport_logs(monkeypatch: pytest.MonkeyPatch) -> None:
    # The hwreport logger does not propagate by default, which hides records from caplog.
    monkeypatch.setattr(logging.getLogger("hwreport"), "propagate", True)


@pytest.fixture()
def backend() -> MemoryBackend:
    memory = MemoryBackend()
    memory.add_chip(CHIP)
    return memory


@pytest.fixture()
def make_feature(backend: MemoryBackend) -> Callable[..., Feature]:
    def _make(kind: int, name: str, roles: Optional[Dict] = None, label: Optional[str] = "") -> Feature:
        feature = backend.add_feature(CHIP, name, kind, label)
        for role, value in (roles or {}).items():
            backend.add_subfeature(CHIP, feature, f"{name}_{role.name.lower()}", role, value)
        return feature

    return _make


@pytest.fixture()
def render(backend: MemoryBackend) -> Callable[..., str]:
    def _render(renderer, feature: Feature, width: int = 12, config: ReportConfig = ReportConfig()) -> str:
        out = io.StringIO()
        renderer(ChipContext(backend=backend, chip=CHIP, label_width=width, config=config, out=out), feature)
        return out.getvalue()

    return _render


@pytest.fixture()
def chip() -> ChipName:
    return CHIP
