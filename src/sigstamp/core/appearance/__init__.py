"""Signature image handling — data URL decoding, PNG preparation, card rendering."""

from .card import generate_signature_image, make_date_str
from .image import SignatureImageData, decode_data_url, load_signature_png, to_data_url

__all__ = [
    "SignatureImageData",
    "decode_data_url",
    "generate_signature_image",
    "load_signature_png",
    "make_date_str",
    "to_data_url",
]
