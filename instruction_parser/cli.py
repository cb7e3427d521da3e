"""
Command line entry point: decode a single instruction or a whole transaction.

    instruction-parser decode --program system --data <base58> --accounts 0 1 --keys <key0> <key1>
    instruction-parser tx <signature>
"""
import sys
import json
import logging
import argparse

import base58

from . import config
from .errors import ParseInstructionError
from .parse_instruction import PARSABLE_PROGRAM_IDS, parse
from .parse_transaction import parse_transaction
from .rpc_client import get_transaction

logger = logging.getLogger(__name__)

PROGRAM_NAMES = {program.value: program_id for program_id, program in PARSABLE_PROGRAM_IDS.items()}


class RawInstruction:
    """Compiled instruction assembled from command line arguments."""

    def __init__(self, accounts, data):
        self.accounts = accounts
        self.data = data


def account_index(value):
    """argparse type for a u8 account table index."""
    index = int(value)
    if not 0 <= index <= 255:
        raise argparse.ArgumentTypeError(f"account index must be in 0..255, got {value}")
    return index


def build_parser():
    parser = argparse.ArgumentParser(prog="instruction-parser", description="Decode Solana instructions")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode", help="Decode one compiled instruction")
    decode.add_argument("--program", required=True, help="Program name (system, vote) or program id")
    decode.add_argument("--data", required=True, help="Instruction data, base58 encoded")
    decode.add_argument("--hex", action="store_true", help="Treat --data as hex instead of base58")
    decode.add_argument("--accounts", type=account_index, nargs="*", default=[], help="Account table indices")
    decode.add_argument("--keys", nargs="*", default=[], help="Ordered account keys, base58")

    tx = subparsers.add_parser("tx", help="Fetch a transaction over RPC and decode its instructions")
    tx.add_argument("signature")
    tx.add_argument("--commitment", default="confirmed")
    return parser


def run_decode(args):
    program_id = PROGRAM_NAMES.get(args.program, args.program)
    try:
        data = bytes.fromhex(args.data) if args.hex else base58.b58decode(args.data)
    except ValueError as e:
        logger.error(f"Invalid instruction data: {e}")
        return 2
    try:
        result = parse(program_id, RawInstruction(args.accounts, data), args.keys)
    except ParseInstructionError as e:
        logger.error(str(e))
        return 1
    print(json.dumps(result, indent=2))
    return 0


def run_tx(args):
    tx_result = get_transaction(args.signature, commitment=args.commitment)
    if not tx_result:
        logger.error(f"Could not fetch transaction {args.signature}")
        return 1
    print(json.dumps(parse_transaction(tx_result), indent=2))
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    config.configure_logging(args.log_level)
    if args.command == "decode":
        return run_decode(args)
    return run_tx(args)


if __name__ == "__main__":
    sys.exit(main())
