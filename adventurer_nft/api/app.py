"""Flask API application."""

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..api.contract_config import ContractConfig, ContractConfigManager
from ..engine.contract import AdventurerNFT
from ..engine.errors import ContractRevert, InvalidArgument, TokenNotFound, Unauthorized
from ..helpers.units import format_ether, parse_ether
from ..models.adventurer import Adventurer, AdventurerClass
from ..models.events import EventType
from ..models.stats import ATTRIBUTE_ALIASES
from ..persistence.state_dumper import StateDumper
from ..security.name_sanitizer import NameSanitizer

CALLER_HEADER = "X-Caller-Address"

logging.basicConfig(level=logging.DEBUG, format='[%(name)-19s - %(levelname)5s] %(message)s')

app = Flask("flask.adventurer_nft")


@app.before_request
def log_request_info():
    app.logger.info('Access to: %s from %s (%s)',
        request.url,
        request.headers.get(CALLER_HEADER, request.remote_addr),
        request.headers.get('User-Agent'))


# Error handlers for API routes
@app.errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    """Return JSON instead of HTML for HTTP errors in API routes."""
    if request.path.startswith("/api/"):
        response = e.get_response()
        response.data = jsonify(
            {
                "error": e.name,
                "code": e.code,
                "description": e.description,
            }
        ).data
        response.content_type = "application/json"
        return response
    return e


@app.errorhandler(ContractRevert)
def handle_contract_revert(e: ContractRevert):
    """Translate a reverted transaction into a JSON error."""
    status = 400
    if isinstance(e, Unauthorized):
        status = 403
    elif isinstance(e, TokenNotFound):
        status = 404
    app.logger.warning(f"Transaction reverted on {request.path}: {type(e).__name__}: {e.reason}")
    return jsonify({"error": type(e).__name__, "reason": e.reason}), status


@app.errorhandler(500)
def handle_internal_error(e: Exception):
    """Handle 500 errors."""
    app.logger.error(f"Internal server error: {e}", exc_info=True)
    return jsonify({"error": "Internal Server Error", "message": "An unexpected error occurred"}), 500


_contract_config_manager = ContractConfigManager()
_name_sanitizer = NameSanitizer()
_contract: Optional[AdventurerNFT] = None
_state_dumper: Optional[StateDumper] = None


def deploy(config: Optional[ContractConfig] = None) -> AdventurerNFT:
    """
    Deploy the contract the API serves, replacing any previous one.

    When dumping is enabled the latest saved state of ``config.contract_id``
    is restored instead of starting empty.
    """
    global _contract, _state_dumper
    if config is not None:
        _contract_config_manager.update_config(config)
    config = _contract_config_manager.config

    _state_dumper = StateDumper(dump_directory=config.dump_directory) if config.dump_enabled else None
    saved_state = _state_dumper.load_state(config.contract_id) if _state_dumper else None

    if saved_state is not None:
        _contract = AdventurerNFT(initial_state=saved_state)
        app.logger.info(f"Restored contract {config.contract_id} (version {saved_state.state_version})")
    else:
        _contract = AdventurerNFT(
            base_uri=config.base_uri,
            mint_price=config.mint_price_wei,
            owner=config.deployer,
            rules=config.rules,
            contract_id=config.contract_id,
        )
        app.logger.info(
            f"Deployed contract {config.contract_id} owned by {config.deployer}, "
            f"mint price {config.mint_price_ether} ether"
        )
        _dump_contract_state()
    return _contract


def _get_contract() -> AdventurerNFT:
    if _contract is None:
        return deploy()
    return _contract


def _dump_contract_state() -> None:
    """Dump contract state to disk."""
    if _state_dumper is None or _contract is None:
        return
    try:
        _state_dumper.dump_state(_contract.state)
    except OSError as e:
        app.logger.error(f"Failed to dump contract state {_contract.state.contract_id}: {e}", exc_info=True)


def _caller() -> str:
    caller = request.headers.get(CALLER_HEADER, "").strip()
    if not caller:
        raise Unauthorized(f"{CALLER_HEADER} header is required")
    return caller


def _json_body() -> dict[str, Any]:
    if not request.is_json:
        raise InvalidArgument("Content-Type must be application/json")
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgument("JSON object body is required")
    return data


def _serialize_adventurer(adventurer: Adventurer) -> dict[str, Any]:
    return {
        "token_id": adventurer.token_id,
        "name": adventurer.name,
        "stats": adventurer.stats.as_list(),
        "current_class": int(adventurer.current_class),
        "current_class_name": adventurer.current_class.name.title(),
        "level": adventurer.level,
        "accrued_exp": adventurer.accrued_exp,
        "status_points": adventurer.status_points,
        "on_adventure": adventurer.on_adventure,
        "adventure_start_block": adventurer.adventure_start_block,
        "class_multipliers": adventurer.class_multipliers.as_aliased_dict(),
    }


def _transaction_response(payload: Optional[dict[str, Any]] = None):
    """Dump the committed state and report the block it was mined in."""
    _dump_contract_state()
    contract = _get_contract()
    return jsonify({"success": True, "block_number": contract.block_number, **(payload or {})})


@app.route("/api/contract", methods=["GET"])
def get_contract_info():
    """Deployment parameters and chain head."""
    contract = _get_contract()
    state = contract.state
    return jsonify(
        {
            "contract_id": state.contract_id,
            "owner": state.owner,
            "base_uri": state.base_uri,
            "mint_price": str(state.mint_price),
            "mint_price_ether": format_ether(state.mint_price),
            "treasury_balance": str(state.treasury_balance),
            "block_number": state.block_number,
            "total_supply": contract.total_supply(),
            "rules": state.rules.model_dump(),
        }
    )


@app.route("/api/adventurers", methods=["POST"])
def mint_adventurer():
    """Mint an adventurer. Body: {"name", "stats": [6 ints], "value_ether" | "value"}."""
    caller = _caller()
    data = _json_body()

    name = data.get("name", "")
    is_valid, error_msg = _name_sanitizer.is_valid(name)
    if not is_valid:
        raise InvalidArgument(f"Invalid name: {error_msg}")

    try:
        if "value" in data:
            value = data["value"]
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidArgument("value must be an integer amount of wei")
        else:
            value = parse_ether(data.get("value_ether", "0"))
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Invalid payment: {e}") from e

    stats = data.get("stats")
    if not isinstance(stats, list):
        raise InvalidArgument("stats must be a list of six integers")

    token_id = _get_contract().mint(caller, _name_sanitizer.sanitize(name), stats, value)
    return _transaction_response({"token_id": token_id})


@app.route("/api/adventurers/<int:token_id>", methods=["GET"])
def get_adventurer_info(token_id: int):
    adventurer = _get_contract().get_adventurer_info(token_id)
    return jsonify({"adventurer": _serialize_adventurer(adventurer)})


@app.route("/api/adventurers/<int:token_id>/owner", methods=["GET"])
def get_owner(token_id: int):
    return jsonify({"token_id": token_id, "owner": _get_contract().owner_of(token_id)})


@app.route("/api/adventurers/<int:token_id>/token-uri", methods=["GET"])
def get_token_uri(token_id: int):
    return jsonify({"token_id": token_id, "token_uri": _get_contract().token_uri(token_id)})


@app.route("/api/adventurers/<int:token_id>/exp", methods=["GET"])
def view_exp(token_id: int):
    """Pending experience of the current adventure."""
    contract = _get_contract()
    return jsonify({"token_id": token_id, "exp": contract.view_exp(token_id), "block_number": contract.block_number})


@app.route("/api/adventurers/<int:token_id>/adventure", methods=["POST"])
def start_adventure(token_id: int):
    _get_contract().adventure(_caller(), token_id)
    return _transaction_response({"token_id": token_id})


@app.route("/api/adventurers/<int:token_id>/claim", methods=["POST"])
def claim_exp(token_id: int):
    accrued = _get_contract().claim_exp(_caller(), token_id)
    return _transaction_response({"token_id": token_id, "accrued_exp": accrued})


@app.route("/api/adventurers/<int:token_id>/level-up", methods=["POST"])
def level_up(token_id: int):
    new_level = _get_contract().level_up(_caller(), token_id)
    return _transaction_response({"token_id": token_id, "level": new_level})


@app.route("/api/adventurers/<int:token_id>/statuses", methods=["POST"])
def upgrade_statuses(token_id: int):
    """Spend status points. Body: {"str": n, "agi": n, ...}, missing keys count as 0."""
    caller = _caller()
    data = _json_body()
    deltas = [data.get(alias, 0) for alias in ATTRIBUTE_ALIASES]
    if not all(isinstance(delta, int) and not isinstance(delta, bool) for delta in deltas):
        raise InvalidArgument("Stat deltas must be integers")

    new_stats = _get_contract().upgrade_statuses(caller, token_id, *deltas)
    return _transaction_response({"token_id": token_id, "stats": new_stats.as_list()})


@app.route("/api/adventurers/<int:token_id>/class-multipliers", methods=["GET"])
def get_class_multipliers(token_id: int):
    multipliers = _get_contract().class_multipliers(token_id)
    return jsonify({"token_id": token_id, "class_multipliers": multipliers.as_aliased_dict()})


@app.route("/api/adventurers/<int:token_id>/class-multipliers", methods=["PUT"])
def set_class_multipliers(token_id: int):
    caller = _caller()
    multipliers = _get_contract().set_class_multiplier(caller, token_id, _json_body())
    return _transaction_response({"token_id": token_id, "class_multipliers": multipliers.as_aliased_dict()})


@app.route("/api/adventurers/<int:token_id>/class", methods=["POST"])
def change_class(token_id: int):
    """Change class. Body: {"class": 1} or {"class": "squire"}."""
    caller = _caller()
    requested = _json_body().get("class")
    if isinstance(requested, bool):
        raise InvalidArgument(f"Unknown class: {requested!r}")
    if isinstance(requested, str) and not requested.isdigit():
        try:
            requested = AdventurerClass[requested.upper()]
        except KeyError as e:
            raise InvalidArgument(f"Unknown class: {requested!r}") from e
    elif isinstance(requested, str):
        requested = int(requested)

    adopted = _get_contract().change_class(caller, token_id, requested)
    return _transaction_response({"token_id": token_id, "current_class": int(adopted)})


@app.route("/api/adventurers/<int:token_id>/transfer", methods=["POST"])
def transfer_adventurer(token_id: int):
    """Transfer a token. Body: {"to": address, "from": address (defaults to caller)}."""
    caller = _caller()
    data = _json_body()
    to_address = data.get("to")
    if not to_address:
        raise InvalidArgument("to is required")

    _get_contract().transfer_from(caller, data.get("from", caller), to_address, token_id)
    return _transaction_response({"token_id": token_id, "owner": to_address})


@app.route("/api/adventurers/<int:token_id>/approve", methods=["POST"])
def approve_adventurer(token_id: int):
    caller = _caller()
    to_address = _json_body().get("to")
    if not to_address:
        raise InvalidArgument("to is required")

    _get_contract().approve(caller, to_address, token_id)
    return _transaction_response({"token_id": token_id, "approved": to_address})


@app.route("/api/chain/mine", methods=["POST"])
def mine_blocks():
    """Mine empty blocks. Body (optional): {"blocks": n}."""
    data = request.get_json(silent=True) or {}
    blocks = data.get("blocks", 1)
    if not isinstance(blocks, int) or isinstance(blocks, bool):
        raise InvalidArgument("blocks must be an integer")

    block_number = _get_contract().mine(blocks)
    return jsonify({"success": True, "block_number": block_number})


@app.route("/api/events", methods=["GET"])
def list_events():
    """Event log. Query: ?type=ExpClaimed&token_id=1."""
    event_type = request.args.get("type")
    token_id = request.args.get("token_id", type=int)
    try:
        parsed_type = EventType(event_type) if event_type else None
    except ValueError as e:
        raise InvalidArgument(f"Unknown event type: {event_type}") from e

    events = _get_contract().query_events(parsed_type, token_id)
    return jsonify({"events": [event.model_dump(mode="json") for event in events]})


@app.route("/api/history", methods=["GET"])
def list_snapshots():
    """List committed snapshots."""
    snapshots = _get_contract().history.list_snapshots()
    return jsonify(
        {
            "snapshots": [
                {
                    "index": snapshot.index,
                    "timestamp": snapshot.timestamp.isoformat(),
                    "block_number": snapshot.state.block_number,
                    "state_version": snapshot.state.state_version,
                    "metadata": snapshot.metadata,
                }
                for snapshot in snapshots
            ]
        }
    )


@app.route("/api/history/revert", methods=["POST"])
def revert_to_snapshot():
    """Revert to a snapshot. Body: {"snapshot_index": n}."""
    data = _json_body()
    snapshot_index = data.get("snapshot_index")
    if not isinstance(snapshot_index, int):
        raise InvalidArgument("snapshot_index is required")

    contract = _get_contract()
    success, error_msg = contract.revert_to(snapshot_index)
    if not success:
        return jsonify({"success": False, "error": error_msg}), 400

    deleted_count = 0
    if _state_dumper is not None:
        deleted_count = _state_dumper.delete_versions_after(contract.state.contract_id, contract.state.state_version)
        app.logger.info(f"Deleted {deleted_count} state file(s) after version {contract.state.state_version}")
    _dump_contract_state()
    return jsonify({"success": True, "block_number": contract.block_number, "deleted_files": deleted_count})


@app.route("/api/withdraw", methods=["POST"])
def withdraw():
    amount = _get_contract().withdraw(_caller())
    return _transaction_response({"amount": str(amount), "amount_ether": format_ether(amount)})


def main() -> None:
    """Deploy the configured contract and serve it."""
    contract = deploy()
    app.logger.info(f"Deploying contracts with the account: {contract.owner}")
    app.logger.info(f"AdventurerNFT deployed to: {contract.state.contract_id}")
    app.run(debug=True, port=5000)


if __name__ == "__main__":
    main()
