"""
CineStream review aggregation and analytics service
"""
