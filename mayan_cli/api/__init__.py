"""HTTP clients for the Mayan explorer and Solana RPC."""

from .explorer import MayanExplorerClient, OrderResponse
from .rpc import AccountInfo, SolanaRpcClient

__all__ = ["AccountInfo", "MayanExplorerClient", "OrderResponse", "SolanaRpcClient"]
