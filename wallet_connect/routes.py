from flask import Blueprint, jsonify

from config import BLITZ_TOKEN_CONFIG

wallet_connect_bp = Blueprint("wallet_connect", __name__, url_prefix="/wallet-connect")


@wallet_connect_bp.route("/config", methods=["GET"])
def wallet_connect_config():
    """Expose chain and token config to the mini-app wallet module."""
    return jsonify({
        "success": True,
        "walletconnect": {
            "chain_id": BLITZ_TOKEN_CONFIG["CHAIN_ID"],
            "rpc_url": BLITZ_TOKEN_CONFIG["RPC_URL"],
            "token_address": BLITZ_TOKEN_CONFIG["TOKEN_ADDRESS"]
        }
    })
