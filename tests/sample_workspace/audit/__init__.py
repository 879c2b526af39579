"""Sample audit package."""

import logging

TRAIL: list[str] = []


def trail(label: str) -> None:
    logging.getLogger(__name__).debug("audit %s", label)
    TRAIL.append(label)
