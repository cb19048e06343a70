#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
CLI - Příkazová řádka
=============================================================================
Použití:
    win-toast push --title "Ahoj" --message "Světe" --audio mail
    win-toast push --title "Mapy" --action "protocol|Otevřít|bingmaps:?q=sushi"
    win-toast push --title "Test" --dry-run          # jen vypíše XML
    win-toast from-file notification.yaml
    win-toast sounds                                 # seznam zvuků
=============================================================================
"""

from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer

from .config import load_config, read_yaml
from .delivery import PowerShellDelivery
from .errors import ToastError
from .logger import setup_logger
from .notification import AUDIO_NAMES, Action, Notification, parse_audio, parse_duration
from .notifier import ToastNotifier


app = typer.Typer(help="Zobrazí Windows toast notifikaci.")

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Konfigurační YAML soubor.")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Jen vypíše XML, nic nezobrazí.")


def _create_notifier(config: dict) -> ToastNotifier:
    log_config = config["logging"]
    logger = setup_logger(
        name="win-toast",
        level=log_config["level"],
        targets=log_config["targets"],
        log_file=log_config.get("file_path"),
        max_bytes=int(log_config.get("max_file_size_mb", 10)) * 1024 * 1024,  # MB → bytes
        backup_count=log_config.get("backup_count", 3),
    )
    delivery = PowerShellDelivery(executable=config["toast"]["powershell"], logger=logger)
    return ToastNotifier(delivery=delivery, logger=logger)


def _load_settings(config: Optional[Path]) -> dict:
    try:
        return load_config(config)
    except ToastError as e:
        typer.echo(f"❌ CHYBA: {e}", err=True)
        raise typer.Exit(code=1)


def _parse_action(text: str) -> Action:
    """"typ|popisek|argumenty" → Action."""
    parts = text.split("|", 2)
    if len(parts) != 3:
        raise typer.BadParameter(f"Akce musí mít tvar 'typ|popisek|argumenty': {text}")
    return Action(*parts)


def _deliver(notifier: ToastNotifier, notification: Notification, dry_run: bool):
    try:
        if dry_run:
            typer.echo(notifier.build(notification))
        else:
            shown = notifier.push(notification)
            if notifier.logger:
                notifier.logger.info(f"✓ Toast zobrazen: {shown.title or shown.message or ''}")
    except ToastError as e:
        typer.echo(f"❌ CHYBA: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def push(
        title: Optional[str] = typer.Option(None, "--title", "-t", help="Nadpis."),
        message: Optional[str] = typer.Option(None, "--message", "-m", help="Text zprávy."),
        app_id: Optional[str] = typer.Option(None, "--app-id", help="Název aplikace."),
        attribution: Optional[str] = typer.Option(None, "--attribution"),
        icon: Optional[str] = typer.Option(None, "--icon", help="Absolutní cesta k ikoně."),
        hero_image: Optional[str] = typer.Option(None, "--hero-image"),
        image: Optional[str] = typer.Option(None, "--image"),
        activation_type: Optional[str] = typer.Option(None, "--activation-type"),
        activation_arguments: Optional[str] = typer.Option(
            None, "--activation-arguments", help="Co se otevře po kliknutí, např. URL."
        ),
        action: Optional[List[str]] = typer.Option(
            None, "--action", help="Tlačítko 'typ|popisek|argumenty', lze opakovat."
        ),
        audio: Optional[str] = typer.Option(None, "--audio", help="Zvuk (viz 'sounds')."),
        loop: bool = typer.Option(False, "--loop", help="Přehrávat zvuk ve smyčce."),
        duration: Optional[str] = typer.Option(None, "--duration", help="short nebo long."),
        config: Optional[Path] = CONFIG_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Sestaví notifikaci z parametrů a zobrazí ji."""
    settings = _load_settings(config)
    toast_config = settings["toast"]

    # Neplatný zvuk/délka = jen varování, pokračujeme s výchozí hodnotou
    audio_value, error = parse_audio(audio or toast_config["audio"])
    if error:
        typer.echo(f"⚠️ Neznámý zvuk '{error.name}', použiji výchozí", err=True)
    duration_value, error = parse_duration(duration or toast_config["duration"])
    if error:
        typer.echo(f"⚠️ Neznámá délka '{error.name}', použiji 'short'", err=True)

    notification = Notification(
        app_id=app_id or toast_config["app_id"],
        title=title,
        message=message,
        attribution=attribution,
        icon=icon,
        hero_image=hero_image,
        image=image,
        activation_type=activation_type,
        activation_arguments=activation_arguments,
        actions=[_parse_action(text) for text in action or []],
        audio=audio_value,
        loop=loop,
        duration=duration_value,
    )

    _deliver(_create_notifier(settings), notification, dry_run)


@app.command("from-file")
def from_file(
        path: Path = typer.Argument(..., help="YAML/JSON soubor s notifikací."),
        config: Optional[Path] = CONFIG_OPTION,
        dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Načte notifikaci ze souboru (klíče appID, title, message, actions, ...)."""
    settings = _load_settings(config)

    try:
        notification = Notification.from_dict(read_yaml(path))
    except ToastError as e:
        typer.echo(f"❌ CHYBA: {e}", err=True)
        raise typer.Exit(code=1)

    if not notification.app_id:
        notification = replace(notification, app_id=settings["toast"]["app_id"])

    _deliver(_create_notifier(settings), notification, dry_run)


@app.command()
def sounds() -> None:
    """Vypíše názvy zvuků pro --audio."""
    for name, audio in AUDIO_NAMES.items():
        typer.echo(f"{name:<16} {audio.value}")


def main():
    app()


if __name__ == "__main__":
    main()
