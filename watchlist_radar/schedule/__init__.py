"""
Dividend schedule inference and call-site resolution.

Modules
-------
inferencer : infer_schedule() — payment history -> InferredSchedule.
             Pure, total, no I/O.
resolver   : resolve_schedule() — caller-level wrapper deciding between no
             schedule (non-payer), the dividend-payer fallback, and inference
             through an injected cache.
projection : project_payment_months() + dividend_per_payment() — derive
             calendar months and per-payment amounts from a frequency.
"""
