import json
import logging

import base58
import pytest
from solders.pubkey import Pubkey

from instruction_parser import cli
from instruction_parser.system_instruction import SystemInstructionType, encode_system_instruction

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def test_decode_transfer(capsys):
    source = str(Pubkey.new_unique())
    destination = str(Pubkey.new_unique())
    data = base58.b58encode(encode_system_instruction(SystemInstructionType.TRANSFER, lamports=55)).decode('ascii')

    exit_code = cli.main(["decode", "--program", "system", "--data", data,
                          "--accounts", "0", "1", "--keys", source, destination])
    output = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert output['parsed'] == {
        'type': 'transfer',
        'info': {'source': source, 'destination': destination, 'lamports': 55},
    }


def test_decode_hex_key_mismatch(capsys):
    source = str(Pubkey.new_unique())
    data = encode_system_instruction(SystemInstructionType.TRANSFER, lamports=55).hex()

    exit_code = cli.main(["decode", "--program", "11111111111111111111111111111111", "--hex", "--data", data,
                          "--accounts", "0", "1", "--keys", source])

    assert exit_code == 1
    assert capsys.readouterr().out == ""


def test_tx_not_found(monkeypatch):
    monkeypatch.setattr(cli, "get_transaction", lambda signature, commitment: None)
    assert cli.main(["tx", "missing"]) == 1


def test_negative_account_index_rejected(capsys):
    data = encode_system_instruction(SystemInstructionType.ALLOCATE, space=1).hex()
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["decode", "--program", "system", "--hex", "--data", data, "--accounts", "-1"])
    assert excinfo.value.code == 2
    assert "account index" in capsys.readouterr().err


def test_account_index_above_u8_rejected():
    with pytest.raises(SystemExit):
        cli.main(["decode", "--program", "system", "--data", "1", "--accounts", "256"])
