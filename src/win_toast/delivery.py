#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
=============================================================================
DELIVERY - Zobrazení notifikace přes PowerShell
=============================================================================
Python nemá přímý přístup k WinRT API pro toast notifikace,
PowerShell ano. Postup:

1. Vygenerujeme PowerShell skript, který načte XML a zavolá
   ToastNotificationManager.CreateToastNotifier(APP_ID).Show(...)
2. Skript uložíme do dočasného souboru (%TEMP%/<uuid>.ps1, UTF-8 s BOM)
3. Spustíme: powershell -ExecutionPolicy Bypass -File <soubor>
4. Soubor VŽDY smažeme (i když PowerShell selže)

Spuštění PowerShellu je zdaleka nejpomalejší část, občas trvá i pár sekund.
=============================================================================
"""

import base64
import os
import shutil
import subprocess
import tempfile
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import DeliveryError


DEFAULT_APP_ID = "Windows App"

SCRIPT_TEMPLATE = """\
[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null
[Windows.UI.Notifications.ToastNotification, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null
[Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime] | Out-Null

$APP_ID = '{app_id}'

$template = [System.Text.Encoding]::UTF8.GetString([System.Convert]::FromBase64String('{document}'))

$xml = New-Object Windows.Data.Xml.Dom.XmlDocument
$xml.LoadXml($template)
$toast = New-Object Windows.UI.Notifications.ToastNotification $xml
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier($APP_ID).Show($toast)
"""

# Na Windows schová okno konzole, jinde konstanta neexistuje
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


def quote_powershell(value: str) -> str:
    """Text pro '...' literál v PowerShellu - apostrof se zdvojí."""
    return value.replace("'", "''")


class PowerShellDelivery:
    """
    Předá XML dokument Windows přes dočasný PowerShell skript.

    Použití:
        delivery = PowerShellDelivery(logger=logger)
        delivery.deliver(xml, app_id="Moje aplikace")
    """

    def __init__(
            self,
            executable: str = "powershell",
            temp_dir: Optional[str] = None,
            logger=None
    ):
        """
        Args:
            executable: PowerShell, který se spustí (např. "powershell", "pwsh")
            temp_dir: Kam ukládat dočasné skripty (None = systémový TEMP)
            logger: Logger instance
        """
        self.executable = executable
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self.logger = logger

    def _log(self, level: str, message: str):
        """Pomocná metoda pro logování."""
        if self.logger:
            log_method = getattr(self.logger, level, None)
            if log_method:
                log_method(message)

    def build_script(self, xml: str, app_id: Optional[str] = None) -> str:
        """
        Vygeneruje PowerShell skript, který zobrazí daný XML dokument.

        XML vkládáme jako base64, takže žádný znak z nadpisu ani zprávy
        nemůže rozbít syntaxi skriptu.
        """
        document = base64.b64encode(xml.encode("utf-8")).decode("ascii")
        return SCRIPT_TEMPLATE.format(
            app_id=quote_powershell(str(app_id or DEFAULT_APP_ID)),
            document=document,
        )

    def _write_script(self, path: Path, content: str):
        """Zapíše skript jako UTF-8 s BOM, čitelný jen pro aktuálního uživatele."""
        # O_EXCL = soubor nesmí existovat, 0o600 = práva jen pro vlastníka
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8-sig", newline="\r\n") as f:
            f.write(content)

    def _run_command(self, cmd: List[str]) -> Tuple[int, str, str]:
        """Spustí PowerShell a počká, než skončí."""
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=False,
                creationflags=CREATE_NO_WINDOW
            )
        except OSError as e:
            raise DeliveryError(f"Nelze spustit PowerShell: {e}") from e

        return result.returncode, (result.stdout or "").strip(), (result.stderr or "").strip()

    def deliver(self, xml: str, app_id: Optional[str] = None):
        """
        Zobrazí notifikaci.

        Raises:
            DeliveryError: PowerShell nenalezen, skript nejde zapsat,
                           nebo PowerShell skončil s nenulovým kódem
        """
        # shutil.which = najde cestu k příkazu (jako `where` ve Windows)
        executable_path = shutil.which(self.executable)
        if not executable_path:
            raise DeliveryError(f"PowerShell nenalezen: {self.executable}")

        script_path = self.temp_dir / f"{uuid.uuid4()}.ps1"

        try:
            try:
                self._write_script(script_path, self.build_script(xml, app_id))
            except OSError as e:
                raise DeliveryError(f"Nelze zapsat skript {script_path}: {e}") from e

            self._log("debug", f"Spouštím PowerShell skript: {script_path}")
            rc, stdout, stderr = self._run_command([
                executable_path,
                "-NoProfile",
                "-NonInteractive",
                "-WindowStyle", "Hidden",
                "-ExecutionPolicy", "Bypass",
                "-File", str(script_path),
            ])
            self._log("debug", f"PowerShell skončil s kódem {rc}")

            if rc != 0:
                raise DeliveryError(
                    f"PowerShell skončil s kódem {rc}: {stderr or stdout}",
                    returncode=rc,
                    stderr=stderr,
                )
        finally:
            # finally = provede se VŽDY, dočasný skript nesmí zůstat na disku
            try:
                script_path.unlink(missing_ok=True)
            except OSError as e:
                self._log("warning", f"Nelze smazat dočasný skript {script_path}: {e}")
