from pathlib import Path
from types import SimpleNamespace

import pytest


class FakePowerShell:
    """Zastoupí PowerShell: zapamatuje si příkaz a obsah skriptu."""

    def __init__(self, returncode: int = 0, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        self.calls = []
        self.scripts = []
        self.script_paths = []

    def run(self, cmd, **kwargs):
        path = Path(cmd[-1])
        self.calls.append((cmd, kwargs))
        self.script_paths.append(path)
        self.scripts.append(path.read_bytes())
        return SimpleNamespace(returncode=self.returncode, stdout="", stderr=self.stderr)


@pytest.fixture
def fake_powershell(monkeypatch):
    fake = FakePowerShell()
    monkeypatch.setattr("shutil.which", lambda name: f"C:/Windows/System32/{name}.exe")
    monkeypatch.setattr("subprocess.run", fake.run)
    return fake
