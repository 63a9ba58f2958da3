from pathlib import Path

import pytest

from summary_server.config import Settings
from summary_server.services import HistoryStore, SummarizationGateway

from .fakes import StubGenerate, gemini_payload


@pytest.fixture()
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "history.json"


@pytest.fixture()
def settings(history_path: Path) -> Settings:
    return Settings(gemini_api_key="test-key", history_path=history_path)


@pytest.fixture()
def store(history_path: Path) -> HistoryStore:
    return HistoryStore(history_path)


@pytest.fixture()
def stub_generate() -> StubGenerate:
    return StubGenerate(payload=gemini_payload("A fox runs."))


@pytest.fixture()
def gateway(store, settings, stub_generate) -> SummarizationGateway:
    return SummarizationGateway(store, settings=settings, generate=stub_generate)
