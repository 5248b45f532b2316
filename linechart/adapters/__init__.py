from .prices import load_price_history, prices_from_frame, prices_to_data_points, x_axis_label

__all__ = [
    "load_price_history",
    "prices_from_frame",
    "prices_to_data_points",
    "x_axis_label",
]
