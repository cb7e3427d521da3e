"""
Minimal JSON-RPC access for fetching transactions to decode.
"""
import time
import logging

import requests

from . import config

logger = logging.getLogger(__name__)


def make_rpc_request(method, params=None, retries=None, retry_delay=1, url=None):
    """Make a direct JSON-RPC request to the Solana node with retries."""
    if params is None:
        params = []
    if retries is None:
        retries = config.RPC_RETRIES
    url = url or config.SOLANA_URL

    headers = {"Content-Type": "application/json"}
    payload = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": method,
        "params": params
    }

    logger.debug(f"Making RPC request: {method} with params: {params}")

    for attempt in range(retries):
        try:
            response = requests.post(url, headers=headers, json=payload, timeout=config.RPC_TIMEOUT)
            if response.status_code == 200:
                result = response.json()
                if 'error' in result:
                    logger.error(f"RPC error: {result['error']}")
                    return result  # Return the error result so caller can handle it
                logger.debug(f"RPC response received for {method}")
                return result
            logger.error(f"RPC request failed with status {response.status_code}: {response.text}")
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error making RPC request: {str(e)}")

        if attempt < retries - 1:
            logger.info(f"Retrying in {retry_delay} seconds... (attempt {attempt+1}/{retries})")
            time.sleep(retry_delay)
            retry_delay *= 2  # Exponential backoff

    return None


def get_transaction(signature, commitment="confirmed"):
    """Fetch a transaction in json encoding. Returns the result dict, or None."""
    params = [signature, {"encoding": "json", "commitment": commitment, "maxSupportedTransactionVersion": 0}]
    response = make_rpc_request("getTransaction", params)
    if not response or 'result' not in response:
        return None
    if response['result'] is None:
        logger.info(f"Transaction {signature} not found")
    return response['result']
