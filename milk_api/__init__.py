"""Milk Delivery API: a CRUD proxy over a Google Sheet of milk deliveries."""
