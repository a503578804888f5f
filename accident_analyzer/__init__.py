"""
Accident record validation and aggregation pipeline.
"""
