"""Tests for the PowerShell delivery step (PowerShell itself is always faked)."""

import base64
import re
import stat
import sys

import pytest

from win_toast.delivery import PowerShellDelivery, quote_powershell
from win_toast.errors import DeliveryError


XML = '<toast><visual><binding template="ToastGeneric"><text><![CDATA[Hi $env:USERNAME \'@]]></text></binding></visual></toast>'


def _embedded_document(script: str) -> str:
    encoded = re.search(r"FromBase64String\('([A-Za-z0-9+/=]+)'\)", script).group(1)
    return base64.b64decode(encoded).decode("utf-8")


def test_build_script_embeds_document_and_app_id():
    script = PowerShellDelivery().build_script(XML, "Acme")

    assert "$APP_ID = 'Acme'" in script
    assert "CreateToastNotifier($APP_ID).Show($toast)" in script
    assert XML not in script
    assert _embedded_document(script) == XML


def test_build_script_default_app_id():
    assert "$APP_ID = 'Windows App'" in PowerShellDelivery().build_script(XML, "")
    assert "$APP_ID = 'Windows App'" in PowerShellDelivery().build_script(XML, None)


def test_app_id_quotes_are_doubled():
    assert quote_powershell("Bob's App") == "Bob''s App"
    assert "$APP_ID = 'Bob''s App'" in PowerShellDelivery().build_script(XML, "Bob's App")


def test_deliver_runs_powershell_and_removes_script(fake_powershell, tmp_path):
    PowerShellDelivery(temp_dir=str(tmp_path)).deliver(XML, "Acme")

    assert len(fake_powershell.calls) == 1
    cmd, kwargs = fake_powershell.calls[0]
    assert cmd[0] == "C:/Windows/System32/powershell.exe"
    assert cmd[cmd.index("-ExecutionPolicy") + 1] == "Bypass"
    assert cmd[cmd.index("-File") + 1] == str(fake_powershell.script_paths[0])
    assert kwargs["check"] is False

    script_path = fake_powershell.script_paths[0]
    assert script_path.parent == tmp_path
    assert script_path.suffix == ".ps1"
    assert not script_path.exists()


def test_script_is_utf8_with_bom(fake_powershell, tmp_path):
    PowerShellDelivery(temp_dir=str(tmp_path)).deliver(XML, "Ačme")

    content = fake_powershell.scripts[0]
    assert content.startswith(b"\xef\xbb\xbf")
    script = content[3:].decode("utf-8")
    assert "$APP_ID = 'Ačme'" in script
    assert _embedded_document(script) == XML


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_script_is_private_while_running(monkeypatch, fake_powershell, tmp_path):
    modes = []
    original_run = fake_powershell.run

    def run(cmd, **kwargs):
        modes.append(stat.S_IMODE(tmp_path.joinpath(cmd[-1]).stat().st_mode))
        return original_run(cmd, **kwargs)

    monkeypatch.setattr("subprocess.run", run)
    PowerShellDelivery(temp_dir=str(tmp_path)).deliver(XML)

    assert modes == [0o600]


def test_failed_powershell_raises_and_cleans_up(fake_powershell, tmp_path):
    fake_powershell.returncode = 1
    fake_powershell.stderr = "Element not found."

    with pytest.raises(DeliveryError) as excinfo:
        PowerShellDelivery(temp_dir=str(tmp_path)).deliver(XML, "Acme")

    assert excinfo.value.returncode == 1
    assert excinfo.value.stderr == "Element not found."
    assert "Element not found." in str(excinfo.value)
    assert not fake_powershell.script_paths[0].exists()
    assert list(tmp_path.iterdir()) == []


def test_launch_error_raises_and_cleans_up(monkeypatch, tmp_path):
    seen = []

    def run(cmd, **kwargs):
        seen.append(cmd[-1])
        raise PermissionError("access denied")

    monkeypatch.setattr("shutil.which", lambda name: "powershell.exe")
    monkeypatch.setattr("subprocess.run", run)

    with pytest.raises(DeliveryError, match="access denied"):
        PowerShellDelivery(temp_dir=str(tmp_path)).deliver(XML)

    assert len(seen) == 1
    assert list(tmp_path.iterdir()) == []


def test_missing_powershell(monkeypatch, tmp_path):
    monkeypatch.setattr("shutil.which", lambda name: None)

    with pytest.raises(DeliveryError, match="pwsh"):
        PowerShellDelivery(executable="pwsh", temp_dir=str(tmp_path)).deliver(XML)


def test_unwritable_temp_dir(fake_powershell, tmp_path):
    delivery = PowerShellDelivery(temp_dir=str(tmp_path / "missing"))

    with pytest.raises(DeliveryError, match="Nelze zapsat"):
        delivery.deliver(XML)

    assert fake_powershell.calls == []
