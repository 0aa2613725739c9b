"""Multi-threaded bakery simulation.

Customers arrive, wait for a seat, order a cake and pay for it. A fixed pool of
chefs serves two work queues (baking and payment) and shares a single cash
register:
- capacity pools gate store occupancy and seating
- work queues + register arbitrate what each chef does next
- per-customer completion signals wake exactly the customer a chef served

See `python -m bakery_sim.app -h` for how to run.
"""
