"""
Configuration de loguru pour ByteSpikes.

Une seule sortie console (stderr); aucun fichier n'est écrit.
"""

from __future__ import annotations

import sys

from loguru import logger


def setup_logger(level: str = "INFO", enable_colors: bool = True) -> None:
    """Remplace les handlers de loguru par une sortie stderr.

    Args:
        level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_colors: Couleurs si stderr est un terminal
    """
    logger.remove()

    colorize = enable_colors and sys.stderr.isatty()
    if colorize:
        console_format = (
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<blue>{function}</blue> | "
            "<level>{message}</level>"
        )
    else:
        console_format = "{time:HH:mm:ss.SSS} | {level: <8} | {name}:{function} | {message}"

    logger.add(
        sys.stderr,
        level=level.upper(),
        format=console_format,
        colorize=colorize,
    )
