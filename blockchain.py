"""
BLITZ token minting.

The reward wallet (REWARD_WALLET_PRIVATE_KEY) is a minter on the BLITZ
ERC20 contract; every payout is a signed ``mint(address,uint256)`` call
that is awaited until the receipt comes back.
"""
import logging
from decimal import Decimal

from web3 import Web3
from web3.exceptions import TimeExhausted
from eth_account import Account

from config import BLITZ_TOKEN_CONFIG
from errors import InvalidAddress, MintRejected, MintTimeout

logger = logging.getLogger(__name__)

BLITZ_TOKEN_ABI = [
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"}
        ],
        "name": "mint",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]


def mask_wallet_address(wallet_address: str) -> str:
    """Mask wallet address for logging"""
    if not wallet_address or len(wallet_address) < 10:
        return wallet_address
    return wallet_address[:6] + "..." + wallet_address[-4:]


class TokenMintService:
    """Mints BLITZ rewards using the reward wallet private key"""

    def __init__(self, settings=None, w3=None):
        settings = settings or BLITZ_TOKEN_CONFIG

        self.rpc_url = settings['RPC_URL']
        self.chain_id = settings['CHAIN_ID']
        self.receipt_timeout = settings['RECEIPT_TIMEOUT']
        self.gas_limit = settings['GAS_LIMIT']
        self.explorer_url = settings.get('EXPLORER_URL', '')

        self.w3 = w3 or Web3(Web3.HTTPProvider(self.rpc_url))
        self.token_address = Web3.to_checksum_address(settings['TOKEN_ADDRESS'])
        self.token_contract = self.w3.eth.contract(address=self.token_address, abi=BLITZ_TOKEN_ABI)

        private_key = settings.get('REWARD_WALLET_PRIVATE_KEY')
        if private_key:
            if not private_key.startswith('0x'):
                private_key = '0x' + private_key
            self.reward_account = Account.from_key(private_key)
            self.reward_address = self.reward_account.address
        else:
            self.reward_account = None
            self.reward_address = None
            logger.warning("⚠️ REWARD_WALLET_PRIVATE_KEY not configured - minting disabled")

        logger.info("🪙 BLITZ Token Mint Service initialized")
        logger.info(f"   Token: {self.token_address}")
        logger.info(f"   Reward wallet: {self.reward_address}")

    def mint(self, wallet_address: str, amount: Decimal) -> str:
        """
        Mint ``amount`` BLITZ to ``wallet_address`` and wait for confirmation.

        Returns:
            Transaction hash (0x-prefixed hex)

        Raises:
            InvalidAddress: recipient is not a valid account address
            MintTimeout: no receipt within RECEIPT_TIMEOUT seconds
            MintRejected: wallet not configured, RPC/contract error or reverted tx
        """
        if not wallet_address or not Web3.is_address(wallet_address):
            raise InvalidAddress()

        if not self.reward_account:
            logger.error("❌ REWARD_WALLET_PRIVATE_KEY not configured")
            raise MintRejected("Reward wallet not configured")

        logger.info(f"🪙 Minting {amount} BLITZ to {mask_wallet_address(wallet_address)}")

        try:
            amount_wei = Web3.to_wei(Decimal(amount), 'ether')

            nonce = self.w3.eth.get_transaction_count(self.reward_address)
            gas_price = int(self.w3.eth.gas_price * 1.2)  # Add 20% buffer

            transaction = self.token_contract.functions.mint(
                Web3.to_checksum_address(wallet_address),
                amount_wei
            ).build_transaction({
                'from': self.reward_address,
                'nonce': nonce,
                'gas': self.gas_limit,
                'gasPrice': gas_price,
                'chainId': self.chain_id
            })

            signed_txn = self.w3.eth.account.sign_transaction(
                transaction,
                private_key=self.reward_account.key
            )

            logger.info("📡 Sending mint transaction...")
            tx_hash = self.w3.eth.send_raw_transaction(signed_txn.raw_transaction)
        except Exception as e:
            logger.error(f"❌ Mint transaction could not be sent: {e}")
            raise MintRejected(f"Failed to mint tokens: {e}") from e

        tx_hash_hex = tx_hash.hex()
        if not tx_hash_hex.startswith('0x'):
            tx_hash_hex = '0x' + tx_hash_hex

        logger.info(f"🔗 Transaction sent: {tx_hash_hex}")

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except TimeExhausted as e:
            logger.error(f"⏳ Mint not confirmed after {self.receipt_timeout}s: {tx_hash_hex}")
            raise MintTimeout(f"Mint transaction {tx_hash_hex} not confirmed in time") from e
        except Exception as e:
            logger.error(f"❌ Error waiting for mint receipt: {e}")
            raise MintRejected(f"Failed to confirm mint: {e}") from e

        if receipt.status != 1:
            logger.error(f"❌ Mint failed on-chain: {tx_hash_hex}")
            raise MintRejected("Transaction failed on blockchain")

        logger.info(f"✅ Minted {amount} BLITZ - TX: {tx_hash_hex}")
        logger.info(f"🔗 Explorer: {self.explorer_url}{tx_hash_hex}")
        return tx_hash_hex
