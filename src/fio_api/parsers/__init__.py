"""Decoders for the bank's response formats"""

from .base import decode_amount, decode_date, decode_unsigned, encode_request_date
from .record_decoder import decode_record, decode_transaction_type
from .response_reader import FioResponse, ReaderState, RecordResult, ResponseInfo

__all__ = [
    'FioResponse',
    'ReaderState',
    'RecordResult',
    'ResponseInfo',
    'decode_amount',
    'decode_date',
    'decode_record',
    'decode_transaction_type',
    'decode_unsigned',
    'encode_request_date',
]
