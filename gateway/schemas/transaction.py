from pydantic import BaseModel, ConfigDict


class TransactionRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    transactions_type: str | None = None
    order: str | None = None
    wallet: str | None = None
    amount: int | float | None = None
    currency: str | None = None
    country: str | None = None
    url_notify: str | None = None
    beneficiary_first_name: str | None = None
    beneficiary_last_name: str | None = None
    beneficiary_email: str | None = None
    beneficiary_document_type: str | None = None
    beneficiary_document_number: str | None = None
    beneficiary_address: str | None = None
    bank_code: str | None = None
    account_type_bank: str | None = None
    account_bank: str | None = None
    purpose: str | None = None
    purpose_commentary: str | None = None

    def provider_body(self) -> dict:
        return self.model_dump(exclude_none=True)
