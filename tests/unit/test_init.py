"""
Модульные тесты для resume_editor/__init__.py
Тестирует метаданные, конфигурацию, логирование и публичный API пакета.
"""

import json
import logging
import re
from pathlib import Path

import pytest

import resume_editor


class TestVersionMetadata:
    """Тестирование метаданных версии и констант."""

    def test_version_format(self) -> None:
        """Проверить, что __version__ следует семантическому версионированию."""
        assert re.match(r"^\d+\.\d+\.\d+$", resume_editor.__version__)

    def test_version_components(self) -> None:
        """Проверить, что компоненты версии соответствуют __version__."""
        expected = (
            f"{resume_editor.VERSION_MAJOR}."
            f"{resume_editor.VERSION_MINOR}."
            f"{resume_editor.VERSION_PATCH}"
        )
        assert resume_editor.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(resume_editor, name)
            assert isinstance(value, str) and value, f"{name} должен быть непустой строкой"


class TestPublicAPI:
    """Тестирование экспортов публичного API."""

    def test_all_exports_exist(self) -> None:
        for name in resume_editor.__all__:
            assert hasattr(resume_editor, name), f"Имя '{name}' из __all__ не существует в модуле"

    def test_no_duplicate_exports(self) -> None:
        assert len(resume_editor.__all__) == len(set(resume_editor.__all__))

    def test_engine_exported(self) -> None:
        """Операции движка доступны с уровня пакета."""
        for name in ("apply_style", "query_style_at", "replace_all", "ContentElement"):
            assert name in resume_editor.__all__

    def test_package_level_round_trip(self) -> None:
        element = resume_editor.ContentElement.from_text("Hello World")
        element.apply_style((2, 5), resume_editor.StyleFacet.BOLD, True)
        assert [run.text for run in element.segments] == ["He", "llo", " World"]


class TestLogging:
    """Тестирование конфигурации логирования."""

    def test_get_logger_name_format(self) -> None:
        logger = resume_editor.get_logger("test_module")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "resume_editor.test_module"

    def test_get_logger_with_qualified_name(self) -> None:
        logger = resume_editor.get_logger("resume_editor.model.segments")
        assert logger.name == "resume_editor.model.segments"

    def test_get_logger_with_main(self) -> None:
        assert resume_editor.get_logger("__main__").name == "resume_editor.main"

    def test_get_logger_with_dots(self) -> None:
        logger = resume_editor.get_logger(".storage.store")
        assert logger.name == "resume_editor.storage.store"

    def test_package_logger_has_handler(self) -> None:
        """Логгер пакета настроен при импорте."""
        assert len(logging.getLogger("resume_editor").handlers) >= 1

    def test_setup_logging_idempotent(self) -> None:
        package_logger = logging.getLogger("resume_editor")
        before = list(package_logger.handlers)
        resume_editor._setup_logging()
        assert package_logger.handlers == before


class TestConfiguration:
    """Тестирование управления конфигурацией."""

    REQUIRED_KEYS = ("storage_path", "storage_quota_bytes", "site_password_env")

    def test_load_config_defaults(self, tmp_path: Path) -> None:
        """Файл не существует: возвращаются все ключи по умолчанию."""
        config = resume_editor.load_config(tmp_path / "nonexistent_config.json")
        for key in self.REQUIRED_KEYS:
            assert key in config, f"В конфигурации по умолчанию отсутствует ключ: {key}"
        assert config["storage_quota_bytes"] == 5 * 1024 * 1024
        assert config["site_password_env"] == "SITE_PASSWORD"

    def test_load_config_merge_behavior(self, tmp_path: Path) -> None:
        config_path = tmp_path / "partial_config.json"
        config_path.write_text(
            json.dumps({"storage_path": "data/resumes.json", "custom_key": 1}), encoding="utf-8"
        )

        config = resume_editor.load_config(config_path)

        assert config["storage_path"] == "data/resumes.json"
        assert config["custom_key"] == 1
        assert config["storage_quota_bytes"] == 5 * 1024 * 1024

    def test_defaults_not_mutated(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"storage_path": "other.json"}), encoding="utf-8")
        resume_editor.load_config(config_path)
        assert resume_editor.load_config(tmp_path / "missing.json")["storage_path"] == "resumes.json"

    @pytest.mark.parametrize(
        "content",
        ["{invalid json content", json.dumps(["not", "a", "dict"])],
        ids=["invalid-json", "non-dict"],
    )
    def test_load_config_malformed_falls_back(
        self, tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Некорректный файл: предупреждение и конфигурация по умолчанию."""
        config_path = tmp_path / "bad_config.json"
        config_path.write_text(content, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="resume_editor"):
            config = resume_editor.load_config(config_path)

        assert config["storage_path"] == "resumes.json"
        assert any(r.levelno == logging.WARNING for r in caplog.records)


class TestDependencyCheck:
    def test_check_dependencies(self) -> None:
        deps = resume_editor.check_dependencies()
        assert set(deps) == {"argon2-cffi"}
        assert deps["argon2-cffi"] is True


class TestDocumentation:
    """Тестирование наличия документации."""

    def test_module_has_docstring(self) -> None:
        assert resume_editor.__doc__ is not None
        assert len(resume_editor.__doc__) > 100

    def test_load_config_has_docstring(self) -> None:
        assert "Аргументы:" in resume_editor.load_config.__doc__
        assert "Возвращает:" in resume_editor.load_config.__doc__
