"""Batch ingestion entry point: config checks, exit codes and cleanup."""

from unittest.mock import MagicMock, patch

from sqlalchemy.exc import ArgumentError

from feed_server.config import ServerConfig
from feed_server.scripts import ingest
from feed_server.services import IngestionReport

MODULE = "feed_server.scripts.ingest"


def _config(**overrides):
    values = dict(
        gnews_api_key="key",
        embedding_service_url="https://embed.example.com",
        database_url="postgresql://u:p@db.example.com/news",
    )
    values.update(overrides)
    return ServerConfig(**values)


def _run(config, report=None, run_error=None, argv=()):
    engine = MagicMock()
    pipeline = MagicMock()
    pipeline.report = report or IngestionReport()
    if run_error is not None:
        pipeline.run.side_effect = run_error
    else:
        pipeline.run.return_value = pipeline.report
    with patch(f"{MODULE}.create_db_engine", return_value=engine), \
            patch(f"{MODULE}.IngestionPipeline", return_value=pipeline) as pipeline_cls:
        code = ingest.main(list(argv), config=config)
    return code, engine, pipeline_cls


class TestIngestScript:
    def test_missing_config_exits_1_without_connecting(self):
        with patch(f"{MODULE}.create_db_engine") as create_engine:
            assert ingest.main([], config=ServerConfig()) == 1
        create_engine.assert_not_called()

    def test_localhost_embedding_service_rejected(self):
        with patch(f"{MODULE}.create_db_engine") as create_engine:
            code = ingest.main([], config=_config(embedding_service_url="http://localhost:7860"))
        assert code == 1
        create_engine.assert_not_called()

    def test_success_exits_0_and_disposes_engine(self):
        code, engine, _ = _run(_config())
        assert code == 0
        engine.connect.assert_called_once()
        engine.dispose.assert_called_once()

    def test_rate_limit_abort_exits_1(self):
        report = IngestionReport(aborted=True, abort_reason="rate limited on technology")
        code, engine, _ = _run(_config(), report=report)
        assert code == 1
        engine.dispose.assert_called_once()

    def test_unhandled_error_exits_1_and_disposes_engine(self):
        code, engine, _ = _run(_config(), run_error=RuntimeError("db went away"))
        assert code == 1
        engine.dispose.assert_called_once()

    def test_cli_overrides(self):
        argv = ["--categories", "science,sports", "--per-category", "5", "--delay", "0"]
        _, _, pipeline_cls = _run(_config(), argv=argv)
        args, kwargs = pipeline_cls.call_args
        assert args[3] == ["science", "sports"]
        assert kwargs["per_category"] == 5
        assert kwargs["category_delay"] == 0.0

    def test_engine_creation_failure_is_logged_and_exits_1(self, caplog):
        with patch(f"{MODULE}.create_db_engine", side_effect=ArgumentError("bad dialect")), \
                patch(f"{MODULE}.IngestionPipeline") as pipeline_cls:
            code = ingest.main([], config=_config(database_url="nosuchdb://u@h/x"))
        assert code == 1
        pipeline_cls.assert_not_called()
        assert "Error during ingestion" in caplog.text
