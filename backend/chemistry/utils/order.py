def compact_order(items, order_field="position"):
    """
    Re-assigns sequential order values (1..N), keeping the current relative order.
    Ties keep their incoming sequence.
    """
    ordered = sorted(items, key=lambda item: getattr(item, order_field) or 0)

    for index, item in enumerate(ordered, start=1):
        setattr(item, order_field, index)

    return ordered
