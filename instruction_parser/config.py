import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Configure Solana RPC endpoint
SOLANA_NETWORK = os.getenv('SOLANA_NETWORK', 'devnet')  # 'devnet', 'testnet', or 'mainnet-beta'
if SOLANA_NETWORK == 'mainnet-beta':
    SOLANA_URL = 'https://api.mainnet-beta.solana.com'
elif SOLANA_NETWORK == 'testnet':
    SOLANA_URL = 'https://api.testnet.solana.com'
else:
    SOLANA_URL = 'https://api.devnet.solana.com'
SOLANA_URL = os.getenv('SOLANA_RPC_URL', SOLANA_URL)


def _int_setting(name, default):
    """Read an integer environment variable, falling back to the default."""
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid {name} format, using default value of {default}")
        return default


RPC_TIMEOUT = _int_setting('RPC_TIMEOUT', 10)  # Seconds
RPC_RETRIES = _int_setting('RPC_RETRIES', 3)


def configure_logging(level=None):
    """Configure root logging for command line use."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
