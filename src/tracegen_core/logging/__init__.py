from tracegen_core.logging.logger import (
    create_isolated_logger as create_isolated_logger,
    create_null_logger as create_null_logger,
)
