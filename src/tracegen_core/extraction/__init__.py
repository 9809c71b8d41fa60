from tracegen_core.extraction.extractor import (
    extract_targets as extract_targets,
    resolve_import as resolve_import,
    resolve_qualifier as resolve_qualifier,
    DEFAULT_SUFFIX as DEFAULT_SUFFIX,
)
from tracegen_core.extraction.shapes import (
    SHAPE_MATCHERS as SHAPE_MATCHERS,
    ShapeMatcher as ShapeMatcher,
    UnaryEnvelopeMatcher as UnaryEnvelopeMatcher,
)
