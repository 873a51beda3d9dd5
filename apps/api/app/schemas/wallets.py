from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExportWalletRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    wallet_id: str = Field(alias="walletId", min_length=1)
    address: str = Field(min_length=1)
    public_key: str = Field(alias="publicKey", min_length=1)


class EncryptedWalletKey(BaseModel):
    encapsulated_key: str
    ciphertext: str


class ExportWalletResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    encrypted_data: EncryptedWalletKey = Field(alias="encryptedData")


class UpdateWalletPolicyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    wallet_id: str = Field(alias="walletId", min_length=1)
    policy_ids: list[str] = Field(alias="policyIds")
    owner_id: str | None = Field(default=None, alias="ownerId")


class UpdateWalletPolicyResponse(BaseModel):
    success: bool = True
    wallet: dict[str, Any]
