import textwrap

import pytest

from floorrota.domain.types import WorkerProfile


@pytest.fixture
def make_worker():
    """
    テスト用の作業員を作るフィクスチャ。

    使い方:
        def test_xxx(make_worker):
            w = make_worker(initial_shift="night", rotation_enabled=False)
    """

    def _factory(**kwargs) -> WorkerProfile:
        kwargs.setdefault("id", "worker-001")
        kwargs.setdefault("name", "Alice")
        return WorkerProfile(**kwargs)

    return _factory


@pytest.fixture
def write_toml(tmp_path):
    def _writer(content: str, name: str = "workers.toml"):
        p = tmp_path / name
        p.write_text(textwrap.dedent(content), encoding="utf-8")
        return p

    return _writer
