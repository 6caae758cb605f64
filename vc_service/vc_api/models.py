"""Credential API request and response models."""

from typing import Mapping, Optional, Sequence

from marshmallow import EXCLUDE, fields, validate

from ..credential.models import CreateCredentialRequest as ServiceCreateCredentialRequest
from ..credential.models import VerifiableCredential, VerifiableCredentialSchema
from ..messaging.models.base import BaseModel, BaseModelSchema
from ..messaging.models.openapi import OpenAPISchema
from ..messaging.valid import (
    CREDENTIAL_ID_EXAMPLE,
    GENERIC_DID_EXAMPLE,
    JSON_SCHEMA_ID_EXAMPLE,
    RFC3339_DATETIME_EXAMPLE,
    ClaimValueField,
    non_empty_mapping,
)


class CreateCredentialRequest(BaseModel):
    """Credential creation request as received over the wire."""

    class Meta:
        """CreateCredentialRequest metadata."""

        schema_class = "CreateCredentialRequestSchema"

    def __init__(
        self,
        *,
        issuer: str = None,
        subject: str = None,
        context: Optional[str] = None,
        schema: Optional[str] = None,
        data: Mapping = None,
        expiry: Optional[str] = None,
    ):
        """Initialize the request."""
        super().__init__()
        self.issuer = issuer
        self.subject = subject
        self.context = context
        self.schema = schema
        self.data = data
        self.expiry = expiry

    def to_service_request(self) -> ServiceCreateCredentialRequest:
        """Map this request onto the credential service request."""
        return ServiceCreateCredentialRequest(
            issuer=self.issuer,
            subject=self.subject,
            context=self.context,
            json_schema=self.schema,
            data=self.data,
            expiry=self.expiry,
        )


class CreateCredentialRequestSchema(BaseModelSchema):
    """Request schema for creating a credential."""

    class Meta:
        """CreateCredentialRequestSchema metadata."""

        model_class = CreateCredentialRequest
        unknown = EXCLUDE

    issuer = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        metadata={"description": "Issuer identifier", "example": GENERIC_DID_EXAMPLE},
    )
    subject = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        metadata={
            "description": "Subject identifier",
            "example": "did:key:z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp",
        },
    )
    context = fields.Str(
        data_key="@context",
        required=False,
        metadata={
            "description": "Additional JSON-LD context; empty applies the defaults",
            "example": "https://www.w3.org/2018/credentials/examples/v1",
        },
    )
    schema = fields.Str(
        required=False,
        metadata={
            "description": "Identifier of the JSON schema the data must satisfy",
            "example": JSON_SCHEMA_ID_EXAMPLE,
        },
    )
    data = fields.Dict(
        keys=fields.Str(),
        values=ClaimValueField(),
        required=True,
        validate=non_empty_mapping,
        metadata={
            "description": "Claims about the subject",
            "example": {"name": "Cai Leblanc", "degree": {"type": "BachelorDegree"}},
        },
    )
    expiry = fields.Str(
        required=False,
        metadata={
            "description": "Expiration date-time (RFC3339)",
            "example": RFC3339_DATETIME_EXAMPLE,
        },
    )


class CreateCredentialResponse(BaseModel):
    """Envelope for a newly created credential."""

    class Meta:
        """CreateCredentialResponse metadata."""

        schema_class = "CreateCredentialResponseSchema"

    def __init__(self, *, credential: VerifiableCredential = None):
        """Initialize the response."""
        super().__init__()
        self.credential = credential


class CreateCredentialResponseSchema(BaseModelSchema):
    """Response schema for creating a credential."""

    class Meta:
        """CreateCredentialResponseSchema metadata."""

        model_class = CreateCredentialResponse

    credential = fields.Nested(VerifiableCredentialSchema(), required=True)


class GetCredentialResponse(BaseModel):
    """Envelope for a credential fetched by identifier."""

    class Meta:
        """GetCredentialResponse metadata."""

        schema_class = "GetCredentialResponseSchema"

    def __init__(self, *, id: str = None, credential: VerifiableCredential = None):
        """Initialize the response."""
        super().__init__()
        self.id = id
        self.credential = credential


class GetCredentialResponseSchema(BaseModelSchema):
    """Response schema for fetching a credential."""

    class Meta:
        """GetCredentialResponseSchema metadata."""

        model_class = GetCredentialResponse

    id = fields.Str(
        required=True,
        metadata={
            "description": "Credential identifier",
            "example": CREDENTIAL_ID_EXAMPLE,
        },
    )
    credential = fields.Nested(VerifiableCredentialSchema(), required=True)


class GetCredentialsResponse(BaseModel):
    """Envelope for the credentials matching a query."""

    class Meta:
        """GetCredentialsResponse metadata."""

        schema_class = "GetCredentialsResponseSchema"

    def __init__(self, *, credentials: Sequence[VerifiableCredential] = None):
        """Initialize the response."""
        super().__init__()
        self.credentials = list(credentials or [])


class GetCredentialsResponseSchema(BaseModelSchema):
    """Response schema for querying credentials."""

    class Meta:
        """GetCredentialsResponseSchema metadata."""

        model_class = GetCredentialsResponse

    credentials = fields.List(fields.Nested(VerifiableCredentialSchema()), required=True)


class CredentialIdMatchInfoSchema(OpenAPISchema):
    """Path parameters for credential lookups."""

    credential_id = fields.Str(
        required=True,
        metadata={
            "description": "Credential identifier",
            "example": CREDENTIAL_ID_EXAMPLE,
        },
    )


class CredentialsQueryStringSchema(OpenAPISchema):
    """Query string for credential lookups; exactly one filter is allowed."""

    issuer = fields.Str(
        required=False,
        metadata={"description": "Issuer identifier", "example": GENERIC_DID_EXAMPLE},
    )
    subject = fields.Str(
        required=False,
        metadata={"description": "Subject identifier", "example": GENERIC_DID_EXAMPLE},
    )
    schema = fields.Str(
        required=False,
        metadata={"description": "Schema identifier", "example": JSON_SCHEMA_ID_EXAMPLE},
    )


class DeleteCredentialResponseSchema(OpenAPISchema):
    """Response schema for deleting a credential; the body is empty."""
