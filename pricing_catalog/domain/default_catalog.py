"""Built-in catalog used on first start and by ``reset_to_default``."""

from functools import lru_cache

from pricing_catalog.schemas.catalog import Catalog, Region


def _service(id, name, type, currency, coverage, limits, tat, fees):
    return {
        "id": id,
        "name": name,
        "type": type,
        "currency": currency,
        "coverage": coverage,
        "transactionLimit": {"min": limits[0], "max": limits[1]},
        "tat": tat,
        "feeStructure": {"fixed": fees[0], "percentage": fees[1], "currency": fees[2]},
    }


DEFAULT_CATALOG_DATA = [
    {
        "id": "europe",
        "name": "Europe",
        "countries": [
            {
                "code": "GB",
                "name": "United Kingdom",
                "services": [
                    _service("bank-payout-gb-fps", "Faster Payments", "bank-payout", "GBP",
                             "All UK banks", (1, 250000), "Real Time", (0.25, 0, "GBP")),
                    _service("bank-payout-gb-bacs", "BACS", "bank-payout", "GBP",
                             "All UK banks", (1, 1000000), "T+3", (0.15, 0, "GBP")),
                ],
            },
            {
                "code": "DE",
                "name": "Germany",
                "services": [
                    _service("bank-payout-de-sepa", "SEPA Credit Transfer", "bank-payout", "EUR",
                             "All SEPA-enabled banks", (0.01, 1000000), "T+1", (0.25, 0, "EUR")),
                    _service("bank-payout-de-instant", "SEPA Instant", "bank-payout", "EUR",
                             "Participating SEPA banks", (0.01, 100000), "Real Time", (0.50, 0, "EUR")),
                ],
            },
        ],
    },
    {
        "id": "north-america",
        "name": "North America",
        "countries": [
            {
                "code": "US",
                "name": "United States",
                "services": [
                    _service("bank-payout-us-ach", "ACH", "bank-payout", "USD",
                             "All US banks", (1, 100000), "T+1", (0.25, 0, "USD")),
                    _service("bank-payout-us-wire", "Wire Transfer", "bank-payout", "USD",
                             "All US banks", (100, 1000000), "Same Day", (5.00, 0, "USD")),
                    _service("wallet-payout-us-paypal", "PayPal", "wallet-payout", "USD",
                             "All PayPal users", (1, 10000), "Real Time", (0.30, 2.9, "USD")),
                ],
            },
            {
                "code": "CA",
                "name": "Canada",
                "services": [
                    _service("bank-payout-ca-eft", "EFT", "bank-payout", "CAD",
                             "All Canadian banks", (1, 100000), "T+1", (0.30, 0, "CAD")),
                    _service("bank-payout-ca-interac", "Interac e-Transfer", "bank-payout", "CAD",
                             "All Canadian banks", (1, 10000), "Real Time", (1.00, 0, "CAD")),
                ],
            },
        ],
    },
    {
        "id": "asia",
        "name": "Asia",
        "countries": [
            {
                "code": "IN",
                "name": "India",
                "services": [
                    _service("bank-payout-in-imps", "IMPS", "bank-payout", "INR",
                             "All Indian banks", (100, 500000), "Real Time", (5.00, 0, "INR")),
                    _service("bank-payout-in-neft", "NEFT", "bank-payout", "INR",
                             "All Indian banks", (1, 1000000), "Same Day", (2.50, 0, "INR")),
                    _service("wallet-payout-in-paytm", "Paytm", "wallet-payout", "INR",
                             "All Paytm users", (10, 50000), "Real Time", (2.00, 0.5, "INR")),
                ],
            },
            {
                "code": "SG",
                "name": "Singapore",
                "services": [
                    _service("bank-payout-sg-fast", "FAST", "bank-payout", "SGD",
                             "All Singapore banks", (0.01, 200000), "Real Time", (0.50, 0, "SGD")),
                    _service("bank-payout-sg-giro", "GIRO", "bank-payout", "SGD",
                             "All Singapore banks", (0.01, 1000000), "T+2", (0.20, 0, "SGD")),
                ],
            },
        ],
    },
    {
        "id": "africa",
        "name": "Africa",
        "countries": [
            {
                "code": "NG",
                "name": "Nigeria",
                "services": [
                    _service("bank-payout-ng", "Bank Transfer", "bank-payout", "NGN",
                             "All Nigerian banks", (1000, 10000000), "Same Day", (1.50, 0, "USD")),
                    _service("mobile-money-ng", "Mobile Money", "mobile-money", "NGN",
                             "All major telcos", (100, 500000), "Real Time", (0.80, 1.2, "USD")),
                ],
            },
            {
                "code": "KE",
                "name": "Kenya",
                "services": [
                    _service("bank-payout-ke", "Bank Transfer", "bank-payout", "KES",
                             "All Kenyan banks", (100, 1000000), "Same Day", (1.00, 0, "USD")),
                    _service("mobile-money-ke-mpesa", "M-Pesa", "mobile-money", "KES",
                             "All M-Pesa users", (10, 300000), "Real Time", (0.50, 1.0, "USD")),
                ],
            },
        ],
    },
    {
        "id": "south-america",
        "name": "South America",
        "countries": [
            {
                "code": "BR",
                "name": "Brazil",
                "services": [
                    _service("bank-payout-br-ted", "TED", "bank-payout", "BRL",
                             "All Brazilian banks", (1, 100000), "Same Day", (2.00, 0, "USD")),
                    _service("bank-payout-br-pix", "PIX", "bank-payout", "BRL",
                             "All PIX participants", (1, 50000), "Real Time", (0.50, 0, "USD")),
                ],
            },
            {
                "code": "CO",
                "name": "Colombia",
                "services": [
                    _service("bank-payout-co", "PSE", "bank-payout", "COP",
                             "All Colombian banks", (1000, 50000000), "Same Day", (1.00, 0, "USD")),
                ],
            },
        ],
    },
    {
        "id": "oceania",
        "name": "Oceania",
        "countries": [
            {
                "code": "AU",
                "name": "Australia",
                "services": [
                    _service("bank-payout-au-direct-entry", "Direct Entry", "bank-payout", "AUD",
                             "All Australian banks", (1, 100000), "T+1", (0.30, 0, "USD")),
                    _service("bank-payout-au-payid", "PayID", "bank-payout", "AUD",
                             "All PayID-enabled banks", (1, 50000), "Real Time", (0.50, 0, "USD")),
                    _service("payment-au-bpay", "BPAY", "bank-payout", "AUD",
                             "All BPAY billers", (1, 100000), "T+1", (0.40, 0, "USD")),
                ],
            },
            {
                "code": "NZ",
                "name": "New Zealand",
                "services": [
                    _service("bank-payout-nz", "Bank Transfer", "bank-payout", "NZD",
                             "All New Zealand banks", (1, 50000), "Same Day", (0.30, 0, "USD")),
                ],
            },
        ],
    },
]


@lru_cache(maxsize=1)
def default_catalog() -> tuple[Region, ...]:
    """Return the built-in catalog. Models are frozen, so one instance is shared."""
    return Catalog.model_validate(DEFAULT_CATALOG_DATA).root
