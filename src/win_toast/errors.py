#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
ERRORS - Výjimky knihovny win_toast
=============================================================================
Všechny výjimky dědí z ToastError, takže volající může chytat jen jednu:

    try:
        push(notification)
    except ToastError as e:
        logger.warning(f"Toast se nepodařilo zobrazit: {e}")
=============================================================================
"""

from typing import Optional


class ToastError(Exception):
    """Společný předek všech chyb win_toast."""


class InvalidAudioError(ToastError):
    """Neznámý název zvuku (viz parse_audio)."""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__("toast: invalid audio")


class InvalidDurationError(ToastError):
    """Neznámá délka zobrazení (viz parse_duration)."""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__("toast: invalid duration")


class ConfigError(ToastError):
    """Chybný konfigurační soubor nebo neznámé klíče notifikace."""


class BuildError(ToastError):
    """Nepodařilo se vyrenderovat XML dokument notifikace."""


class DeliveryError(ToastError):
    """
    PowerShell skript se nepodařilo zapsat nebo spustit,
    případně skončil nenulovým návratovým kódem.
    """

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)
