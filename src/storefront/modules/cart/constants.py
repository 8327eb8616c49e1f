"""Cart domain constants."""

MIN_LINE_QUANTITY = 1

# ``aggregate_id`` used for events about the cart as a whole.
CART_COLLECTION = "cart"
