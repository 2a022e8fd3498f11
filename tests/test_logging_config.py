import logging

from pointgroups.logging_config import setup_logging
from pointgroups.model.group import Group


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "scene.log"

    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))

    assert logger.name == "pointgroups"
    assert len(logger.handlers) == 2
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    assert "Logging initialized." in log_file.read_text(encoding="utf-8")


def test_group_lifecycle_is_logged(scene, three_points, caplog):
    with caplog.at_level(logging.INFO, logger="pointgroups"):
        group = Group(scene, "logged", None, list(three_points))
        group.ungroup()

    assert "Created group logged" in caplog.text
    assert "Ungrouped logged." in caplog.text
