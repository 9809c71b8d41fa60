from tracegen_core.synthesis.synthesizer import (
    TemplateSynthesizer as TemplateSynthesizer,
)
