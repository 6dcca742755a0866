"""
jobsite - trust scoring and dashboard analytics for a construction marketplace.
"""
