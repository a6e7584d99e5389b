"""
Solana Transaction Operations

Pure transaction functionality without console dependencies.
Handles transaction building, signing, submission and confirmation.
"""

import logging
from typing import Any, Dict, Sequence

from solders.instruction import Instruction
from solders.message import Message
from solders.signature import Signature
from solders.transaction import Transaction

from .chain_context import SolanaChainContext
from .wallet import SolanaWallet


logger = logging.getLogger(__name__)


class TransactionConfirmationError(Exception):
    """Transaction was not confirmed or failed on-chain"""

    def __init__(self, signature: str, error: Any = None):
        self.signature = signature
        self.error = error
        super().__init__(f"Transaction {signature} failed confirmation: {error}")


class SolanaTransactions:
    """Builds, signs, submits and confirms transactions for one wallet"""

    def __init__(self, wallet: SolanaWallet, chain_context: SolanaChainContext):
        """
        Initialize transaction manager

        Args:
            wallet: Wallet paying fees and signing
            chain_context: SolanaChainContext instance
        """
        self.wallet = wallet
        self.chain_context = chain_context

    async def set_payer_and_blockhash_transaction(self, instructions: Sequence[Instruction]) -> Transaction:
        """
        Build an unsigned transaction from instructions

        Instructions are kept in order, the wallet pays the fees and the
        latest blockhash is fetched at call time. An empty sequence is allowed.

        Args:
            instructions: Ordered instructions to include

        Returns:
            Unsigned transaction
        """
        fee_payer = self.wallet.public_key
        blockhash = await self.chain_context.get_latest_blockhash()
        message = Message.new_with_blockhash(list(instructions), fee_payer, blockhash)
        return Transaction.new_unsigned(message)

    async def sign_and_send_transaction(self, transaction: Transaction) -> str:
        """
        Sign a transaction with the wallet and broadcast it

        Args:
            transaction: Transaction built by set_payer_and_blockhash_transaction

        Returns:
            Transaction signature

        Raises:
            Exception: Any signing or submission failure, unchanged
        """
        try:
            logger.debug("start sign_and_send_transaction")
            signed_tx = await self.wallet.sign_transaction(transaction)
            logger.debug("signed transaction")
            signature = await self.chain_context.send_raw_transaction(bytes(signed_tx))
            logger.info(f"Transaction submitted: {signature}")
            return str(signature)
        except Exception as e:
            logger.error(f"sign_and_send_transaction error: {e}", exc_info=True)
            raise

    async def confirm_transaction(self, signature: str):
        """
        Wait for confirmation and inspect the resulting status

        Args:
            signature: Transaction signature

        Returns:
            Confirmed transaction status

        Raises:
            TransactionConfirmationError: If no status is returned or it carries an error
        """
        resp = await self.chain_context.confirm_transaction(Signature.from_string(signature))
        logger.info(f"Confirmation result for {signature}: {resp}")

        status = resp.value[0] if resp.value else None
        if status is None:
            raise TransactionConfirmationError(signature, "no signature status returned")
        if status.err is not None:
            raise TransactionConfirmationError(signature, status.err)
        return status

    async def send_instructions(self, instructions: Sequence[Instruction]) -> str:
        """Build, sign, send and confirm a transaction, returning its signature"""
        transaction = await self.set_payer_and_blockhash_transaction(instructions)
        signature = await self.sign_and_send_transaction(transaction)
        await self.confirm_transaction(signature)
        return signature

    def get_transaction_info(self, signature: str) -> Dict[str, Any]:
        """
        Get transaction information

        Args:
            signature: Transaction signature

        Returns:
            Dictionary containing transaction information
        """
        return {
            "signature": signature,
            "explorer_url": self.chain_context.get_explorer_url(signature),
            "network": self.chain_context.network,
        }
