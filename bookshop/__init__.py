"""
BookShop - desktop inventory client for products, categories and orders.
"""
__version__ = "0.1.0"
