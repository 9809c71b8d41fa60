import logging
import sys

from tracegen_core.logging import create_isolated_logger, create_null_logger


class TestLogger:
    def test_console_handler_writes_to_stderr(self):
        logger = create_isolated_logger('tracegen.test.console', level=logging.INFO)

        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert logger.handlers[0].stream is sys.stderr

    def test_handlers_are_replaced(self):
        create_isolated_logger('tracegen.test.replace')
        logger = create_isolated_logger('tracegen.test.replace')

        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / 'tracegen.log'
        logger = create_isolated_logger(
            'tracegen.test.file', level=logging.DEBUG, file_path=str(log_file), console=False
        )

        logger.debug('Indexed STDIN')
        for handler in logger.handlers:
            handler.flush()

        assert 'Indexed STDIN' in log_file.read_text()

    def test_null_logger(self):
        logger = create_null_logger('tracegen.test.null')

        assert [type(handler) for handler in logger.handlers] == [logging.NullHandler]
