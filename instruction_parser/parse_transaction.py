"""
Decode every top-level instruction of a transaction returned by getTransaction.
"""
import logging

import base58
from solders.instruction import CompiledInstruction

from .errors import ParseInstructionError
from .parse_instruction import parse
from .parsed_instruction import render_key

logger = logging.getLogger(__name__)


def get_account_keys(tx_result):
    """Static account keys followed by loaded writable and readonly addresses."""
    message = tx_result['transaction']['message']
    account_keys = list(message['accountKeys'])
    loaded = (tx_result.get('meta') or {}).get('loadedAddresses') or {}
    account_keys.extend(loaded.get('writable', []))
    account_keys.extend(loaded.get('readonly', []))
    return account_keys


def partially_decoded(ui_instruction, account_keys):
    """Raw fallback form for instructions that can't be decoded."""
    program_id_index = ui_instruction['programIdIndex']
    program_id = account_keys[program_id_index] if 0 <= program_id_index < len(account_keys) else None
    return {
        'programId': program_id,
        'accounts': [account_keys[i] for i in ui_instruction['accounts'] if 0 <= i < len(account_keys)],
        'data': ui_instruction['data'],
    }


def parse_ui_instruction(ui_instruction, account_keys):
    """Decode one instruction from a json-encoded transaction, or fall back to its raw form."""
    program_id_index = ui_instruction['programIdIndex']
    if not 0 <= program_id_index < len(account_keys):
        logger.warning(f"Program id index {program_id_index} out of range for {len(account_keys)} keys")
        return partially_decoded(ui_instruction, account_keys)

    try:
        instruction = CompiledInstruction(
            program_id_index,
            base58.b58decode(ui_instruction['data']),
            bytes(ui_instruction['accounts']),
        )
        return parse(account_keys[program_id_index], instruction, account_keys)
    except ParseInstructionError as e:
        logger.debug(f"Falling back to raw instruction for {account_keys[program_id_index]}: {e}")
    except (ValueError, OverflowError) as e:
        logger.debug(f"Malformed instruction encoding: {e}")
    return partially_decoded(ui_instruction, account_keys)


def parse_transaction(tx_result):
    """Decode the instructions of a getTransaction result (json encoding)."""
    account_keys = [render_key(key) for key in get_account_keys(tx_result)]
    instructions = tx_result['transaction']['message']['instructions']
    return [parse_ui_instruction(ui_instruction, account_keys) for ui_instruction in instructions]
