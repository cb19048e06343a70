#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
NOTIFICATION - Data toast notifikace
=============================================================================
Tento modul obsahuje:
- Notification: všechna data jedné notifikace (nadpis, text, obrázky, ...)
- Action: tlačítko pod notifikací
- Audio, Duration: výčty povolených zvuků a délek zobrazení
- parse_audio / parse_duration: převod textu od uživatele na výčet (pro CLI)
- with_defaults: doplnění výchozích hodnot před renderováním

Použití:
    notification = Notification(
        app_id="Google Mail",
        title=email.subject,
        message=email.preview,
        icon="C:/Program Files/Google Mail/icons/logo.png",
        activation_arguments="https://gmail.com",
        audio=Audio.MAIL,
    )
=============================================================================
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .errors import ConfigError, InvalidAudioError, InvalidDurationError


class Audio(Enum):
    """
    Zvuky, které umí Windows přehrát u toast notifikace.

    Hodnota = identifikátor, kterému rozumí Windows (ms-winsoundevent:...).
    SILENT je samostatný případ: notifikace se zobrazí bez zvuku.
    """
    DEFAULT = "ms-winsoundevent:Notification.Default"
    IM = "ms-winsoundevent:Notification.IM"
    MAIL = "ms-winsoundevent:Notification.Mail"
    REMINDER = "ms-winsoundevent:Notification.Reminder"
    SMS = "ms-winsoundevent:Notification.SMS"
    LOOPING_ALARM = "ms-winsoundevent:Notification.Looping.Alarm"
    LOOPING_ALARM_2 = "ms-winsoundevent:Notification.Looping.Alarm2"
    LOOPING_ALARM_3 = "ms-winsoundevent:Notification.Looping.Alarm3"
    LOOPING_ALARM_4 = "ms-winsoundevent:Notification.Looping.Alarm4"
    LOOPING_ALARM_5 = "ms-winsoundevent:Notification.Looping.Alarm5"
    LOOPING_ALARM_6 = "ms-winsoundevent:Notification.Looping.Alarm6"
    LOOPING_ALARM_7 = "ms-winsoundevent:Notification.Looping.Alarm7"
    LOOPING_ALARM_8 = "ms-winsoundevent:Notification.Looping.Alarm8"
    LOOPING_ALARM_9 = "ms-winsoundevent:Notification.Looping.Alarm9"
    LOOPING_ALARM_10 = "ms-winsoundevent:Notification.Looping.Alarm10"
    LOOPING_CALL = "ms-winsoundevent:Notification.Looping.Call"
    LOOPING_CALL_2 = "ms-winsoundevent:Notification.Looping.Call2"
    LOOPING_CALL_3 = "ms-winsoundevent:Notification.Looping.Call3"
    LOOPING_CALL_4 = "ms-winsoundevent:Notification.Looping.Call4"
    LOOPING_CALL_5 = "ms-winsoundevent:Notification.Looping.Call5"
    LOOPING_CALL_6 = "ms-winsoundevent:Notification.Looping.Call6"
    LOOPING_CALL_7 = "ms-winsoundevent:Notification.Looping.Call7"
    LOOPING_CALL_8 = "ms-winsoundevent:Notification.Looping.Call8"
    LOOPING_CALL_9 = "ms-winsoundevent:Notification.Looping.Call9"
    LOOPING_CALL_10 = "ms-winsoundevent:Notification.Looping.Call10"
    SILENT = "silent"

    @property
    def key(self) -> str:
        """Název pro uživatele, např. LOOPING_ALARM_2 → "loopingalarm2"."""
        return self.name.lower().replace("_", "")

    @property
    def is_silent(self) -> bool:
        return self is Audio.SILENT


class Duration(Enum):
    """
    Jak dlouho zůstane notifikace na obrazovce.

    Microsoft doporučuje SHORT, LONG se hodí pro důležité dialogy
    nebo notifikace se smyčkou zvuku.
    """
    SHORT = "short"
    LONG = "long"


# Slovník název → výčet, např. {"mail": Audio.MAIL, ...}
AUDIO_NAMES: Dict[str, Audio] = {audio.key: audio for audio in Audio}
DURATION_NAMES: Dict[str, Duration] = {duration.value: duration for duration in Duration}


def parse_audio(name: str) -> Tuple[Audio, Optional[InvalidAudioError]]:
    """
    Převede název zvuku od uživatele na Audio (hodí se pro CLI).

    Platné názvy (na velikosti písmen nezáleží):
        default, im, mail, reminder, sms,
        loopingalarm, loopingalarm2 .. loopingalarm10,
        loopingcall, loopingcall2 .. loopingcall10,
        silent

    Returns:
        (Audio, None) pokud název známe,
        (Audio.DEFAULT, InvalidAudioError) pokud ne - volající se rozhodne,
        jestli skončí, nebo jen varuje a pokračuje s výchozím zvukem.
    """
    # " Mail " → "mail", None → ""
    audio = AUDIO_NAMES.get((name or "").strip().lower())
    if audio is None:
        return Audio.DEFAULT, InvalidAudioError(name)
    return audio, None


def parse_duration(name: str) -> Tuple[Duration, Optional[InvalidDurationError]]:
    """
    Převede "short" / "long" na Duration.

    Returns:
        (Duration, None) nebo (Duration.SHORT, InvalidDurationError)
    """
    duration = DURATION_NAMES.get((name or "").strip().lower())
    if duration is None:
        return Duration.SHORT, InvalidDurationError(name)
    return duration, None


def _text(data: Dict[str, Any], key: str) -> Optional[str]:
    """
    Vrátí textovou hodnotu klíče jako str.

    YAML načte `appID: 2024` jako int a `title: yes` jako bool - takové
    skaláry převedeme na text. Seznam nebo slovník místo textu je chyba.
    """
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return str(value)
    raise ConfigError(f"'{key}' musí být text, ne {type(value).__name__}")


@dataclass(frozen=True)
class Action:
    """
    Tlačítko pod notifikací.

    Prakticky užitečný je jen typ "protocol", protože se nedozvíme,
    na co uživatel klikl. Například:

        Action("protocol", "Otevřít mapy", "bingmaps:?q=sushi")
    """
    type: str = ""
    label: str = ""
    arguments: str = ""

    def __post_init__(self):
        # None → "", jinak by se v XML objevil text "None"
        for name in ("type", "label", "arguments"):
            if getattr(self, name) is None:
                object.__setattr__(self, name, "")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Action":
        # Položka seznamu actions musí být slovník, ne číslo nebo text
        if not isinstance(data, dict):
            raise ConfigError(f"Akce musí být slovník (mapping), ne {type(data).__name__}")

        unknown = set(data) - {"type", "label", "arguments"}
        if unknown:
            raise ConfigError(f"Neznámé klíče akce: {', '.join(sorted(unknown))}")
        return cls(
            type=_text(data, "type") or "",
            label=_text(data, "label") or "",
            arguments=_text(data, "arguments") or "",
        )

    def to_dict(self) -> Dict[str, str]:
        return {key: value for key, value in
                (("type", self.type), ("label", self.label), ("arguments", self.arguments))
                if value}


# Atribut dataclass → klíč v YAML/JSON souboru
_FIELD_KEYS = {
    "app_id": "appID",
    "title": "title",
    "message": "message",
    "attribution": "attribution",
    "icon": "icon",
    "hero_image": "hero",
    "image": "image",
    "activation_type": "activationType",
    "activation_arguments": "activationArguments",
    "actions": "actions",
    "audio": "audio",
    "loop": "loop",
    "duration": "duration",
}


@dataclass(frozen=True)
class Notification:
    """
    Data jedné toast notifikace.

    Doporučené je vyplnit aspoň app_id a title.

    - app_id: název aplikace v Centru akcí (seskupuje notifikace),
      prázdné = "Windows App"
    - title / message: nadpis a text; bez nadpisu se text zobrazí tučně jako nadpis
    - icon, hero_image: absolutní cesty (skript běží z dočasné složky)
    - activation_arguments: co se otevře po kliknutí, např. "https://google.com"
    - audio: None = výchozí zvuk, Audio.SILENT = bez zvuku

    Prázdný text (None nebo "") znamená, že se daná část XML vůbec nevykreslí.
    """
    app_id: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    attribution: Optional[str] = None
    icon: Optional[str] = None
    hero_image: Optional[str] = None
    image: Optional[str] = None
    activation_type: Optional[str] = None
    activation_arguments: Optional[str] = None
    actions: Tuple[Action, ...] = field(default_factory=tuple)
    audio: Optional[Audio] = None
    loop: bool = False
    duration: Optional[Duration] = None

    def __post_init__(self):
        # Seznam akcí převedeme na tuple, aby notifikace zůstala neměnná
        if not isinstance(self.actions, tuple):
            object.__setattr__(self, "actions", tuple(self.actions or ()))

    def with_defaults(self) -> "Notification":
        return with_defaults(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        """
        Vytvoří notifikaci ze slovníku (např. načteného z YAML).

        Klíče odpovídají JSON tvaru: appID, title, message, attribution,
        icon, hero, image, activationType, activationArguments,
        actions, audio, loop, duration.

        Raises:
            ConfigError: neznámý klíč nebo špatný formát akcí
            InvalidAudioError / InvalidDurationError: neznámý zvuk / délka
        """
        if not isinstance(data, dict):
            raise ConfigError("Notifikace musí být slovník (mapping)")

        # Obrácený slovník: klíč v souboru → atribut dataclass
        attributes = {value: key for key, value in _FIELD_KEYS.items()}
        unknown = set(data) - set(attributes)
        if unknown:
            raise ConfigError(f"Neznámé klíče notifikace: {', '.join(sorted(unknown))}")

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = attributes[key]

            # Prázdná hodnota = pole není vyplněné (stejně jako chybějící klíč)
            if value is None or value == "":
                continue

            if name == "actions":
                if not isinstance(value or [], list):
                    raise ConfigError("'actions' musí být seznam")
                # Položka je hotová Action (z Pythonu) nebo slovník (z YAML)
                kwargs[name] = tuple(
                    item if isinstance(item, Action) else Action.from_dict(item)
                    for item in value or []
                )
            elif name == "audio" and not isinstance(value, Audio):
                audio, error = parse_audio(str(value))
                # V souboru je neznámý zvuk chyba konfigurace, ne jen varování
                if error:
                    raise error
                kwargs[name] = audio
            elif name == "duration" and not isinstance(value, Duration):
                duration, error = parse_duration(str(value))
                if error:
                    raise error
                kwargs[name] = duration
            elif name in ("audio", "duration"):
                # Už je to Audio / Duration (např. z Python kódu)
                kwargs[name] = value
            elif name == "loop":
                kwargs[name] = bool(value)
            else:
                # Textová pole: 2024 → "2024", seznam/slovník → ConfigError
                kwargs[name] = _text(data, key)

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Opak from_dict - vrací jen vyplněná pole."""
        data: Dict[str, Any] = {}
        for name, key in _FIELD_KEYS.items():
            value = getattr(self, name)
            if not value:
                continue
            if name == "actions":
                value = [action.to_dict() for action in value]
            elif name == "audio":
                value = value.key
            elif name == "duration":
                value = value.value
            data[key] = value
        return data


def with_defaults(notification: Notification) -> Notification:
    """
    Vrátí kopii notifikace s doplněnými výchozími hodnotami.

    - activation_type: "protocol"
    - duration: Duration.SHORT
    - audio: Audio.DEFAULT (nikdy SILENT - ticho se musí vyžádat explicitně)

    Už vyplněná pole se nemění, takže opakované volání nic nepokazí.
    """
    # Sbíráme jen změny - vyplněná pole zůstanou, jak jsou
    changes: Dict[str, Any] = {}

    # None i "" znamená "nevyplněno"
    if not notification.activation_type:
        changes["activation_type"] = "protocol"
    if not notification.duration:
        changes["duration"] = Duration.SHORT
    if not notification.audio:
        changes["audio"] = Audio.DEFAULT

    # Nic nechybí → stejný objekt, je neměnný
    if not changes:
        return notification
    return replace(notification, **changes)
