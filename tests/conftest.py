"""
Shared fixtures for the test suite.
"""

import os
import stat
import sys

import pytest

FAKE_MINISIGN = '''#!{python}
import os
import sys

args = sys.argv[1:]
if args == ['-v']:
    print('minisign 0.11')
    sys.exit(0)

target = args[args.index('-m') + 1]
key = args[args.index('-s') + 1]
password = ''
if os.environ.get('FAKE_MINISIGN_READ_STDIN', '1') == '1':
    password = sys.stdin.readline().rstrip('\\n')

with open(os.environ['FAKE_MINISIGN_LOG'], 'a') as log:
    log.write('\\t'.join([os.path.basename(target), key, password]) + '\\n')

if os.path.basename(target) == os.environ.get('FAKE_MINISIGN_FAIL_ON'):
    sys.stderr.write('Wrong password for that key\\n')
    sys.exit(2)

with open(target + '.minisig', 'w') as sig:
    sig.write('untrusted comment: fake signature\\n')
'''


class FakeMinisign:
    """A stand-in minisign executable that records every invocation."""

    def __init__(self, directory):
        self.path = os.path.join(str(directory), 'minisign')
        self.log_path = os.path.join(str(directory), 'minisign.log')

        with open(self.path, 'w') as f:
            f.write(FAKE_MINISIGN.format(python=sys.executable))
        os.chmod(self.path, os.stat(self.path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def calls(self):
        """Return (file name, key path, password) for each signing call."""
        if not os.path.exists(self.log_path):
            return []
        with open(self.log_path, 'r') as f:
            return [tuple(line.rstrip('\n').split('\t')) for line in f if line.strip()]


@pytest.fixture
def fake_minisign(tmp_path, monkeypatch):
    """Provide a fake minisign binary; skipped where scripts cannot be executed directly."""
    if os.name == 'nt':
        pytest.skip("fake minisign relies on a POSIX shebang")

    tool_dir = tmp_path / 'bin'
    tool_dir.mkdir()
    fake = FakeMinisign(tool_dir)
    monkeypatch.setenv('FAKE_MINISIGN_LOG', fake.log_path)
    monkeypatch.delenv('FAKE_MINISIGN_FAIL_ON', raising=False)
    monkeypatch.delenv('MINISIGN_PASSWORD', raising=False)
    monkeypatch.delenv('MINISIGN_BIN', raising=False)
    return fake
