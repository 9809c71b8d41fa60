from tracegen_core.indexer.go_indexer import (
    GoSourceIndexer as GoSourceIndexer,
    GO_LANGUAGE as GO_LANGUAGE,
)
