#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
NOTIFIER - Odesílání toast notifikací
=============================================================================
Spojuje všechny kroky dohromady:

    Notification → with_defaults() → ToastTemplate.render() → PowerShellDelivery

Jednodušší použití (chyby se propagují):
    from win_toast import Notification, push
    push(Notification(app_id="Moje aplikace", title="Ahoj", message="Světe"))

Nebo "best effort" (chyba se jen zaloguje a vrátí se False):
    notifier = ToastNotifier(logger=logger)
    notifier.send("Nadpis", "Text zprávy", audio=Audio.MAIL)
=============================================================================
"""

from typing import Optional

from .builder import ToastTemplate
from .delivery import PowerShellDelivery
from .errors import ToastError
from .notification import Audio, Notification, with_defaults


class ToastNotifier:
    """
    Třída pro odesílání Windows toast notifikací.

    Šablonu i způsob doručení lze předat zvenku (hodí se pro testy).
    """

    def __init__(
            self,
            template: Optional[ToastTemplate] = None,
            delivery: Optional[PowerShellDelivery] = None,
            logger=None
    ):
        self.template = template or ToastTemplate()
        self.delivery = delivery or PowerShellDelivery(logger=logger)
        self.logger = logger

    def _log(self, level: str, message: str):
        """Pomocná metoda pro logování."""
        if self.logger:
            log_method = getattr(self.logger, level, None)
            if log_method:
                log_method(message)

    def build(self, notification: Notification) -> str:
        """Doplní výchozí hodnoty a vrátí XML dokument (bez zobrazení)."""
        return self.template.render(with_defaults(notification))

    def push(self, notification: Notification) -> Notification:
        """
        Zobrazí notifikaci. Blokuje, dokud PowerShell neskončí.

        Returns:
            Notifikace s doplněnými výchozími hodnotami (tak, jak se zobrazila)

        Raises:
            BuildError: XML se nepodařilo vyrenderovat
            DeliveryError: PowerShell selhal
        """
        notification = with_defaults(notification)
        xml = self.template.render(notification)

        self._log("debug", f"Odesílám toast: {notification.title!r} ({len(xml)} znaků XML)")
        self.delivery.deliver(xml, notification.app_id)
        return notification

    def send(
            self,
            title: str,
            message: Optional[str] = None,
            audio: Optional[Audio] = None,
            **fields
    ) -> bool:
        """
        Sestaví a odešle notifikaci, chyby jen zaloguje.

        Args:
            title: Nadpis notifikace
            message: Text zprávy
            audio: Zvuk (None = výchozí, Audio.SILENT = bez zvuku)
            **fields: Další pole Notification (app_id, icon, actions, ...)

        Returns:
            True pokud se notifikace zobrazila, False při chybě
        """
        try:
            self.push(Notification(title=title, message=message, audio=audio, **fields))
        except ToastError as e:
            self._log("warning", f"Toast notifikace selhala: {e}")
            return False
        return True


_default_notifier: Optional[ToastNotifier] = None


def push(notification: Notification) -> Notification:
    """Zobrazí notifikaci výchozím ToastNotifier (vytvoří se při prvním volání)."""
    global _default_notifier
    if _default_notifier is None:
        _default_notifier = ToastNotifier()
    return _default_notifier.push(notification)
