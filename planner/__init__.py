"""
Bike route planner service.

Ranks alternative routes from a GraphHopper instance against a rider's
preferences and explains each ranking in plain language.
"""
