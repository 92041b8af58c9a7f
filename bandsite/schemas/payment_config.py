"""
결제 공급자 설정 스키마

비밀 값은 저장 시 암호화되고, 조회 시 마스킹된다.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Provider = Literal["stripe", "square", "paypal"]


class StripeConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    publishableKey: str = ""
    secretKey: str = ""
    webhookSecret: str = ""
    mode: Literal["test", "live"] = "test"


class SquareConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    applicationId: str = ""
    accessToken: str = ""
    locationId: str = ""
    webhookSignatureKey: str = ""
    mode: Literal["sandbox", "production"] = "sandbox"


class PaypalConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    clientId: str = ""
    clientSecret: str = ""
    mode: Literal["sandbox", "live"] = "sandbox"


class PaymentConfigUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    activeProvider: Optional[Provider] = None
    stripe: StripeConfig = Field(default_factory=StripeConfig)
    square: SquareConfig = Field(default_factory=SquareConfig)
    paypal: PaypalConfig = Field(default_factory=PaypalConfig)


class ProviderTestRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Provider
