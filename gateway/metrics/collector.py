from prometheus_client import Counter


class Metrics:
    def __init__(self):
        self.signed_requests = Counter(
            "vita_signed_requests_total", "Signed outbound provider requests", ["endpoint"]
        )
        self.provider_failures = Counter(
            "vita_provider_failures_total", "Failed outbound provider requests", ["status"]
        )
        self.ipn_verifications = Counter(
            "vita_ipn_verifications_total", "Inbound IPN signature checks", ["outcome"]
        )


metrics = Metrics()
