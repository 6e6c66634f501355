"""Interactive builder for Orbiter cross-chain payloads."""

from .assembler import assemble
from .codec import (
    DecodeError,
    InvalidEncodingError,
    TooLongError,
    decode_address_like,
    generate_test_bytes,
    left_pad,
)
from .config import ConfigurationError, WizardConfig, load_wizard_config
from .errors import (
    AssemblyError,
    InternalStateError,
    OrbgenError,
    UnsupportedFeatureError,
)
from .schema import (
    Action,
    ActionID,
    CCTPAttributes,
    FeeAttributes,
    FeeInfo,
    Forwarding,
    Payload,
    ProtocolID,
    SchemaError,
)
from .wizard import Screen, Session, Wizard

__all__ = [
    "Action",
    "ActionID",
    "AssemblyError",
    "CCTPAttributes",
    "ConfigurationError",
    "DecodeError",
    "FeeAttributes",
    "FeeInfo",
    "Forwarding",
    "InternalStateError",
    "InvalidEncodingError",
    "OrbgenError",
    "Payload",
    "ProtocolID",
    "SchemaError",
    "Screen",
    "Session",
    "TooLongError",
    "UnsupportedFeatureError",
    "Wizard",
    "WizardConfig",
    "assemble",
    "decode_address_like",
    "generate_test_bytes",
    "left_pad",
    "load_wizard_config",
]
