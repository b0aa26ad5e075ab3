from .address_resolver import resolve_wallet_address, is_valid_address
from .routes import wallet_connect_bp


def init_wallet_connect(app):
    """Register WalletConnect module routes."""
    app.register_blueprint(wallet_connect_bp)
    return True


__all__ = ['resolve_wallet_address', 'is_valid_address', 'wallet_connect_bp', 'init_wallet_connect']
