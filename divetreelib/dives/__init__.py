"""Dive log semantics on top of the tree walk: classification, state, files."""

from .model import Trip, Dive, DiveCollection, DiveLog, DecodeHooks
from .classifier import (
    DirectoryAction,
    Classification,
    classify_directory,
    date_from_ancestors,
    leading_digits,
    nonunique_length,
    make_timestamp,
    validate_date,
    validate_time,
)
from .state import WalkContext, StateTracker
from .dispatcher import FileDispatcher, DIVECOMPUTER_PREFIX, DIVE_PREFIX, TRIP_FILE

__all__ = [
    'Trip',
    'Dive',
    'DiveCollection',
    'DiveLog',
    'DecodeHooks',
    'DirectoryAction',
    'Classification',
    'classify_directory',
    'date_from_ancestors',
    'leading_digits',
    'nonunique_length',
    'make_timestamp',
    'validate_date',
    'validate_time',
    'WalkContext',
    'StateTracker',
    'FileDispatcher',
    'DIVECOMPUTER_PREFIX',
    'DIVE_PREFIX',
    'TRIP_FILE',
]
