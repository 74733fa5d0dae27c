"""Persistence of bandit state."""
from bandit_engine.state.codec import read_record, write_record
from bandit_engine.state.records import SoftmaxRecord, UcbRecord

__all__ = ["read_record", "write_record", "SoftmaxRecord", "UcbRecord"]
