"""Structural transcoder between generic JSON trees and Cadence values."""

from .type_codec import TypeCodec
from .value_decoder import ValueDecoder
from .value_encoder import ValueEncoder

__all__ = ["TypeCodec", "ValueDecoder", "ValueEncoder"]
