# guests.py

"""Merge virtual machines and containers into one list."""

from operator import attrgetter
from typing import Iterable, List

from .models import Container, Guest, VirtualMachine

def normalize_guests(vms: Iterable[VirtualMachine],
                     containers: Iterable[Container]) -> List[Guest]:
    """
    Concatenate VMs and containers and sort them by name.

    Python compares str by code point, which orders the same as comparing
    UTF-8 bytes. The sort is stable and duplicates are kept.
    """
    guests: List[Guest] = [*vms, *containers]
    return sorted(guests, key=attrgetter("name"))
