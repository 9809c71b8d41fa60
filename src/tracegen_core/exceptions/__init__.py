from tracegen_core.exceptions.tracegen_exception import (
    TracegenException as TracegenException,
)
from tracegen_core.exceptions.parsing_exception import (
    ParsingException as ParsingException,
)
from tracegen_core.exceptions.shape_mismatch_exception import (
    ShapeMismatchException as ShapeMismatchException,
)
from tracegen_core.exceptions.no_target_exception import (
    NoTargetException as NoTargetException,
)
