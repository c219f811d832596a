import pytest

from quillmarket.config import ProductionConfig
from quillmarket.main import create_app


class TestProductionConfig:
    def test_refuses_to_start_without_secrets(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SECRET_KEY", None)
        monkeypatch.setattr(ProductionConfig, "JWT_SECRET_KEY", None)
        with pytest.raises(RuntimeError) as exc:
            create_app("production")
        assert "SECRET_KEY" in str(exc.value)
        assert "JWT_SECRET_KEY" in str(exc.value)

    def test_starts_with_secrets(self, monkeypatch):
        monkeypatch.setattr(ProductionConfig, "SECRET_KEY", "s" * 32)
        monkeypatch.setattr(ProductionConfig, "JWT_SECRET_KEY", "j" * 32)
        app = create_app("production")
        assert app.config["JWT_COOKIE_SECURE"] is True
        assert not app.config["DEBUG"]
