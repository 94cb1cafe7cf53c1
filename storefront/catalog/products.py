# ==============================================================================
# Sample Product Catalog
# ==============================================================================
"""
Products the storefront ships with until a real catalog source is wired in.
"""

from storefront.core.models import Product

DEFAULT_PRODUCTS: list[Product] = [
    Product(
        id=1,
        name="Studio Microphone XL5",
        description="Professional condenser microphone for studio recording.",
        price=299.99,
        stock=15,
    ),
    Product(
        id=2,
        name="Audio Interface Pro",
        description="High-quality audio interface with low latency.",
        price=199.99,
        stock=8,
    ),
    Product(
        id=3,
        name="Studio Monitors (Pair)",
        description="Accurate sound reproduction for mixing and mastering.",
        price=449.99,
        stock=10,
    ),
    Product(
        id=4,
        name="Wireless Headphones Studio",
        description="Premium wireless headphones with noise cancellation.",
        price=249.99,
        stock=20,
    ),
    Product(
        id=5,
        name="Digital Mixing Console",
        description="16-channel digital mixing console for live and studio use.",
        price=799.99,
        stock=5,
    ),
    Product(
        id=6,
        name="Dynamic Microphone Set",
        description="Set of 3 dynamic microphones ideal for drums and live performance.",
        price=179.99,
        stock=12,
    ),
]
