from prometheus_client import Counter, Histogram


class TicketingMetrics:
    """
    Ticketing System Core Metrics Collector

    Tracks the two hot paths: paid purchases (inventory decrement + ticket issue)
    and gate redemptions (single-use check-in).
    """

    def __init__(self) -> None:
        # ========== Purchase Metrics ==========
        self.purchase_requests = Counter(
            'ticket_purchase_requests_total',
            'Total ticket purchase attempts by outcome',
            ['result'],  # issued, replayed, timeout, or the lowercased error code
        )

        self.tickets_issued = Counter(
            'tickets_issued_total',
            'Tickets issued after confirmed payment',
            ['event_id'],
        )

        self.inventory_conflicts = Counter(
            'inventory_update_conflicts_total',
            'Conditional inventory updates that matched no row and were retried',
            ['event_id'],
        )

        self.reference_conflicts = Counter(
            'payment_reference_conflicts_total',
            'Payment claims that lost to a concurrent purchase with the same reference',
        )

        self.purchase_duration = Histogram(
            'ticket_purchase_duration_seconds',
            'Purchase processing time including payment verification',
            ['result'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 20.0],
        )

        # ========== Redemption Metrics ==========
        self.redemption_requests = Counter(
            'ticket_redemption_requests_total',
            'Ticket redemption attempts by status',
            ['status'],  # valid/already_used/not_found/error
        )

        self.redemption_duration = Histogram(
            'ticket_redemption_duration_seconds',
            'Redemption processing time',
            ['status'],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

    # ========== Helper Methods ==========

    def record_purchase(self, *, result: str, duration: float) -> None:
        self.purchase_requests.labels(result=result).inc()
        self.purchase_duration.labels(result=result).observe(duration)

    def record_tickets_issued(self, *, event_id: str, quantity: int) -> None:
        self.tickets_issued.labels(event_id=event_id).inc(quantity)

    def record_inventory_conflict(self, *, event_id: str) -> None:
        self.inventory_conflicts.labels(event_id=event_id).inc()

    def record_reference_conflict(self) -> None:
        self.reference_conflicts.inc()

    def record_redemption(self, *, status: str, duration: float) -> None:
        self.redemption_requests.labels(status=status).inc()
        self.redemption_duration.labels(status=status).observe(duration)


# Global metrics instance
metrics = TicketingMetrics()
