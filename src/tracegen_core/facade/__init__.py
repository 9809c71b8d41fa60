from tracegen_core.facade.tracegen import Tracegen as Tracegen
