from typing import Annotated

from fastapi import APIRouter, Depends

from walletauth_sdk.client import PrivyClient

from app.core.auth import require_bearer_token
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.modules.custody.service import export_wallet, get_custody_client, update_wallet_policy
from app.schemas.wallets import (
    EncryptedWalletKey,
    ExportWalletRequest,
    ExportWalletResponse,
    UpdateWalletPolicyRequest,
    UpdateWalletPolicyResponse,
)

router = APIRouter(prefix="/api", tags=["wallets"])
Custody = Annotated[PrivyClient, Depends(get_custody_client)]


@router.post(
    "/export-wallet",
    response_model=ExportWalletResponse,
    summary="Export Wallet",
    description=(
        "Requests an HPKE-encrypted export of the wallet private key for the "
        "caller-supplied recipient public key. The ciphertext is relayed as-is."
    ),
    responses=COMMON_ERROR_RESPONSES,
    dependencies=[Depends(require_bearer_token)],
)
def export_wallet_endpoint(payload: ExportWalletRequest, custody: Custody) -> ExportWalletResponse:
    encrypted = export_wallet(custody, payload.wallet_id, payload.public_key)
    return ExportWalletResponse(encrypted_data=EncryptedWalletKey(**encrypted))


@router.post(
    "/update-wallet-policy",
    response_model=UpdateWalletPolicyResponse,
    summary="Update Wallet Policy",
    responses=COMMON_ERROR_RESPONSES,
)
def update_wallet_policy_endpoint(
    payload: UpdateWalletPolicyRequest, custody: Custody
) -> UpdateWalletPolicyResponse:
    wallet = update_wallet_policy(custody, payload.wallet_id, payload.policy_ids, payload.owner_id)
    return UpdateWalletPolicyResponse(wallet=wallet)
