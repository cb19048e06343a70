#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
LOGGER - Nastavení logování
=============================================================================
Knihovna sama loguje jen přes logger, který jí předáš (parametr logger=...).
Bez loggeru je potichu - knihovna nemá co psát do cizí aplikace.

Tenhle modul logger vytvoří pro CLI podle sekce "logging" v config.yaml:
- výstup do konzole (stderr)
- výstup do souboru s rotací (když soubor naroste, vytvoří se nový)

Příklad řádku v logu:
    2025-01-15 14:30:45 | win-toast | DEBUG    | PowerShell skončil s kódem 0
=============================================================================
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional


# %(levelname)-8s = úroveň zarovnaná na 8 znaků, aby sloupce v logu lícovaly
LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int):
    """Nastaví handleru úroveň + formát a přidá ho k loggeru."""
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
        name: str = "win-toast",
        level: str = "INFO",
        targets: Optional[List[str]] = None,
        log_file: Optional[str] = None,
        max_bytes: int = 10485760,
        backup_count: int = 3
) -> logging.Logger:
    """
    Vytvoří a nakonfiguruje logger.

    Args:
        name: Název loggeru (objeví se v každém řádku logu)
        level: DEBUG = i cesty k dočasným skriptům a návratové kódy PowerShellu,
               INFO = zobrazené notifikace, WARNING / ERROR = jen problémy
        targets: Kam logovat - ["console"], ["file"], oboje, nebo [] = nikam
        log_file: Cesta k log souboru (použije se jen s "file" v targets)
        max_bytes: Velikost souboru, po které se založí nový (10 MB)
        backup_count: Kolik starých souborů ponechat (win-toast.log.1, .2, ...)

    Returns:
        Nakonfigurovaný logger
    """
    # None = výchozí konzole, prázdný seznam = logování vypnuté
    if targets is None:
        targets = ["console"]

    logger = logging.getLogger(name)

    # Text z configu → konstanta ("debug" → logging.DEBUG), překlep → INFO
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(log_level)

    # CLI volá setup_logger při každém příkazu - staré handlery zahodíme,
    # jinak by se každý řádek v logu objevil vícekrát
    logger.handlers.clear()

    if "console" in targets:
        # stderr, protože stdout patří výstupu CLI (XML z --dry-run, seznam zvuků)
        _attach(logger, logging.StreamHandler(sys.stderr), log_level)

    if "file" in targets and log_file:
        # Složku pro logy vytvoříme, pokud ještě neexistuje (např. logs/)
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

        # RotatingFileHandler: po max_bytes přejmenuje soubor na .1
        # a začne nový, starší než backup_count smaže
        _attach(
            logger,
            RotatingFileHandler(
                filename=log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8"
            ),
            log_level
        )

    # Nechceme, aby zprávy probublaly do root loggeru hostitelské aplikace
    logger.propagate = False

    return logger
