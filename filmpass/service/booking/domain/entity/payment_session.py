from typing import Optional

import attrs


@attrs.define(frozen=True)
class PaymentSession:
    """
    Handle for the payment provider's hosted widget.

    client_secret is consumed once by the widget. session_id is the only correlation
    key that survives the redirect, so it is already embedded in return_url.
    """

    client_secret: str = attrs.field(repr=False)
    session_id: str
    amount_minor: int
    return_url: str
    publishable_key: Optional[str] = None
