"""
Solana Wallet Management

Pure wallet functionality without console dependencies.
Wallets hold key material, track connection state and sign transactions.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction


logger = logging.getLogger(__name__)


class WalletConnectionError(Exception):
    """Wallet could not be connected"""
    pass


class WalletNotConnectedError(Exception):
    """Operation requires a connected wallet"""
    pass


class SignatureRejectedError(Exception):
    """Signing request was declined"""
    pass


class SolanaWallet:
    """
    Wallet adapter backed by a local keypair

    Key material is resolved lazily on connect(), the way a browser wallet
    only exposes its public key after the user approves the connection.
    An optional approval hook is consulted before every signature.
    """

    def __init__(
        self,
        keypair_loader: Callable[[], Keypair],
        provider_url: str = "https://www.sollet.io",
        approve: Optional[Callable[[Transaction], bool]] = None,
    ):
        """
        Initialize wallet

        Args:
            keypair_loader: Callable returning the wallet keypair
            provider_url: Wallet provider the keys are associated with
            approve: Optional hook; returning False rejects a signing request
        """
        self._keypair_loader = keypair_loader
        self._keypair: Optional[Keypair] = None
        self.provider_url = provider_url
        self.approve = approve

    @classmethod
    def from_keypair(cls, keypair: Keypair, **kwargs) -> "SolanaWallet":
        """Create a wallet around an existing keypair"""
        return cls(lambda: keypair, **kwargs)

    @classmethod
    def from_mnemonic(cls, mnemonic: str, passphrase: str = "", **kwargs) -> "SolanaWallet":
        """Create a wallet from a BIP39 seed phrase"""
        return cls(lambda: Keypair.from_seed_phrase_and_passphrase(mnemonic, passphrase), **kwargs)

    @classmethod
    def from_secret_key(cls, secret_key: str, **kwargs) -> "SolanaWallet":
        """Create a wallet from a base58 encoded 64-byte secret key"""
        return cls(lambda: Keypair.from_base58_string(secret_key), **kwargs)

    @classmethod
    def from_keypair_file(cls, path: str, **kwargs) -> "SolanaWallet":
        """Create a wallet from a Solana CLI JSON keypair file"""

        def load() -> Keypair:
            return Keypair.from_json(Path(path).expanduser().read_text())

        return cls(load, **kwargs)

    async def connect(self) -> None:
        """
        Connect the wallet, resolving its key material

        Raises:
            WalletConnectionError: If the keypair cannot be loaded
        """
        if self._keypair is not None:
            return
        try:
            self._keypair = self._keypair_loader()
        except Exception as e:
            logger.error(f"Wallet connection to {self.provider_url} failed: {e}")
            raise WalletConnectionError(f"Could not load wallet keypair: {e}") from e
        logger.info(f"Wallet connected: {self._keypair.pubkey()}")

    async def disconnect(self) -> None:
        """Forget the loaded key material"""
        self._keypair = None

    def connected(self) -> bool:
        """Whether the wallet has been connected"""
        return self._keypair is not None

    @property
    def public_key(self) -> Pubkey:
        """Wallet public key"""
        if self._keypair is None:
            raise WalletNotConnectedError("Wallet is not connected")
        return self._keypair.pubkey()

    async def sign_transaction(self, transaction: Transaction) -> Transaction:
        """
        Sign a transaction with the wallet keypair

        Args:
            transaction: Unsigned transaction with payer and blockhash set

        Returns:
            Fully signed transaction

        Raises:
            WalletNotConnectedError: If the wallet is not connected
            SignatureRejectedError: If the approval hook declines
        """
        if self._keypair is None:
            raise WalletNotConnectedError("Wallet is not connected")

        if self.approve is not None and not self.approve(transaction):
            raise SignatureRejectedError("Transaction signature rejected by wallet")

        message = transaction.message
        return Transaction([self._keypair], message, message.recent_blockhash)

    def get_wallet_info(self) -> Dict[str, Any]:
        """
        Get wallet information

        Returns:
            Dictionary containing wallet information
        """
        return {
            "provider_url": self.provider_url,
            "connected": self.connected(),
            "public_key": str(self._keypair.pubkey()) if self._keypair else None,
        }


class WalletManager:
    """Manages multiple named Solana wallets for different roles"""

    def __init__(self, provider_url: str = "https://www.sollet.io"):
        self.provider_url = provider_url
        self.wallets: Dict[str, SolanaWallet] = {}
        self.default_wallet: Optional[str] = None

    def add_wallet(self, name: str, wallet: SolanaWallet, set_as_default: bool = False) -> SolanaWallet:
        """
        Add a wallet under a given name

        Args:
            name: Wallet name/role (e.g., "admin", "donor")
            wallet: SolanaWallet instance
            set_as_default: Whether to set this as the default wallet

        Returns:
            The added wallet
        """
        self.wallets[name] = wallet

        if set_as_default or self.default_wallet is None:
            self.default_wallet = name

        return wallet

    def get_wallet(self, name: Optional[str] = None) -> Optional[SolanaWallet]:
        """Get wallet by name or default wallet"""
        if name is None:
            name = self.default_wallet

        return self.wallets.get(name) if name else None

    def get_wallet_names(self) -> List[str]:
        """Get list of all wallet names"""
        return list(self.wallets.keys())

    def set_default_wallet(self, name: str) -> bool:
        """
        Set default wallet by name

        Returns:
            True if successful, False if wallet doesn't exist
        """
        if name in self.wallets:
            self.default_wallet = name
            return True
        return False

    def get_default_wallet_name(self) -> Optional[str]:
        """Get name of default wallet"""
        return self.default_wallet

    def remove_wallet(self, name: str) -> bool:
        """Remove wallet by name"""
        if name in self.wallets:
            del self.wallets[name]
            if self.default_wallet == name:
                self.default_wallet = next(iter(self.wallets.keys()), None)
            return True
        return False

    @classmethod
    def from_environment(cls, provider_url: str = "https://www.sollet.io") -> "WalletManager":
        """
        Create WalletManager from environment variables

        Supports a single wallet (wallet_mnemonic, wallet_secret_key or
        wallet_keypair_path) and role wallets (wallet_mnemonic_<role>)

        Returns:
            WalletManager instance with wallets loaded from environment
        """
        manager = cls(provider_url)

        single_mnemonic = os.getenv("wallet_mnemonic")
        secret_key = os.getenv("wallet_secret_key")
        keypair_path = os.getenv("wallet_keypair_path")
        if single_mnemonic:
            manager.add_wallet(
                "default", SolanaWallet.from_mnemonic(single_mnemonic, provider_url=provider_url), set_as_default=True
            )
        elif secret_key:
            manager.add_wallet(
                "default", SolanaWallet.from_secret_key(secret_key, provider_url=provider_url), set_as_default=True
            )
        elif keypair_path:
            manager.add_wallet(
                "default", SolanaWallet.from_keypair_file(keypair_path, provider_url=provider_url), set_as_default=True
            )

        for key, mnemonic in os.environ.items():
            if not key.startswith("wallet_mnemonic_"):
                continue
            role = key.replace("wallet_mnemonic_", "")
            if mnemonic and role:
                manager.add_wallet(role, SolanaWallet.from_mnemonic(mnemonic, provider_url=provider_url))

        return manager

    def get_wallet_info_all(self) -> Dict[str, Any]:
        """Get information for all wallets"""
        return {
            "default_wallet": self.default_wallet,
            "wallets": {name: wallet.get_wallet_info() for name, wallet in self.wallets.items()},
        }
