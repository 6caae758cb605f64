"""Credential models shared by the service layer and its callers."""

from typing import List, Mapping, Optional

from marshmallow import EXCLUDE, fields

from ..messaging.models.base import BaseModel, BaseModelSchema
from ..messaging.models.openapi import OpenAPISchema
from ..messaging.valid import (
    CREDENTIAL_ID_EXAMPLE,
    GENERIC_DID_EXAMPLE,
    JSON_SCHEMA_ID_EXAMPLE,
    RFC3339_DATETIME_EXAMPLE,
    RFC3339_DATETIME_VALIDATE,
    ClaimValueField,
)

CREDENTIALS_CONTEXT_V1_URL = "https://www.w3.org/2018/credentials/v1"
VERIFIABLE_CREDENTIAL_TYPE = "VerifiableCredential"
JSON_SCHEMA_VALIDATOR_TYPE = "JsonSchemaValidator2018"


class CreateCredentialRequest(BaseModel):
    """Canonical request to issue a credential."""

    class Meta:
        """CreateCredentialRequest metadata."""

        schema_class = "CreateCredentialRequestSchema"

    def __init__(
        self,
        *,
        issuer: str = None,
        subject: str = None,
        context: Optional[str] = None,
        json_schema: Optional[str] = None,
        data: Mapping = None,
        expiry: Optional[str] = None,
    ):
        """Initialize the request."""
        super().__init__()
        self.issuer = issuer
        self.subject = subject
        self.context = context
        self.json_schema = json_schema
        self.data = data
        self.expiry = expiry


class CreateCredentialRequestSchema(BaseModelSchema):
    """Canonical credential creation request schema."""

    class Meta:
        """CreateCredentialRequestSchema metadata."""

        model_class = CreateCredentialRequest
        unknown = EXCLUDE

    issuer = fields.Str(required=True)
    subject = fields.Str(required=True)
    context = fields.Str(required=False, allow_none=True)
    json_schema = fields.Str(required=False, allow_none=True)
    data = fields.Dict(keys=fields.Str(), values=ClaimValueField(), required=True)
    expiry = fields.Str(required=False, allow_none=True)


class CredentialSchemaRefSchema(OpenAPISchema):
    """Reference to the JSON schema a credential was validated against."""

    id = fields.Str(
        required=True,
        metadata={"description": "Schema identifier", "example": JSON_SCHEMA_ID_EXAMPLE},
    )
    type = fields.Str(
        required=True,
        metadata={
            "description": "Schema validator type",
            "example": JSON_SCHEMA_VALIDATOR_TYPE,
        },
    )


class VerifiableCredential(BaseModel):
    """Verifiable Credential model."""

    class Meta:
        """VerifiableCredential metadata."""

        schema_class = "VerifiableCredentialSchema"

    def __init__(
        self,
        context: Optional[List[str]] = None,
        id: Optional[str] = None,
        type: Optional[List[str]] = None,
        issuer: Optional[str] = None,
        issuance_date: Optional[str] = None,
        expiration_date: Optional[str] = None,
        credential_subject: Optional[dict] = None,
        credential_schema: Optional[dict] = None,
    ) -> None:
        """Initialize the VerifiableCredential instance."""
        super().__init__()
        self.context = context or [CREDENTIALS_CONTEXT_V1_URL]
        self.id = id
        self.type = type or [VERIFIABLE_CREDENTIAL_TYPE]
        self.issuer = issuer
        self.issuance_date = issuance_date
        self.expiration_date = expiration_date
        self.credential_subject = credential_subject or {}
        self.credential_schema = credential_schema

    @property
    def subject_id(self) -> Optional[str]:
        """Getter for the credential subject id."""
        return self.credential_subject.get("id")

    @property
    def schema_id(self) -> Optional[str]:
        """Getter for the credential schema id."""
        return (self.credential_schema or {}).get("id")


class VerifiableCredentialSchema(BaseModelSchema):
    """Verifiable credential schema.

    Based on https://www.w3.org/TR/vc-data-model

    """

    class Meta:
        """VerifiableCredentialSchema metadata."""

        model_class = VerifiableCredential
        unknown = EXCLUDE

    context = fields.List(
        fields.Str(),
        data_key="@context",
        required=True,
        metadata={
            "description": "The JSON-LD context of the credential",
            "example": [CREDENTIALS_CONTEXT_V1_URL],
        },
    )
    id = fields.Str(
        required=True,
        metadata={
            "description": "The ID of the credential",
            "example": CREDENTIAL_ID_EXAMPLE,
        },
    )
    type = fields.List(
        fields.Str(),
        required=True,
        metadata={
            "description": "The JSON-LD type of the credential",
            "example": [VERIFIABLE_CREDENTIAL_TYPE],
        },
    )
    issuer = fields.Str(
        required=True,
        metadata={"description": "The credential issuer", "example": GENERIC_DID_EXAMPLE},
    )
    issuance_date = fields.Str(
        data_key="issuanceDate",
        required=True,
        validate=RFC3339_DATETIME_VALIDATE,
        metadata={
            "description": "The issuance date",
            "example": RFC3339_DATETIME_EXAMPLE,
        },
    )
    expiration_date = fields.Str(
        data_key="expirationDate",
        required=False,
        validate=RFC3339_DATETIME_VALIDATE,
        metadata={
            "description": "The expiration date",
            "example": RFC3339_DATETIME_EXAMPLE,
        },
    )
    credential_subject = fields.Dict(
        keys=fields.Str(),
        values=ClaimValueField(),
        data_key="credentialSubject",
        required=True,
        metadata={
            "description": "Subject id and claims",
            "example": {"id": GENERIC_DID_EXAMPLE, "name": "Cai Leblanc"},
        },
    )
    credential_schema = fields.Nested(
        CredentialSchemaRefSchema(),
        data_key="credentialSchema",
        required=False,
    )
