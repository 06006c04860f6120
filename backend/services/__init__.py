"""
Room search services: filter model, query builder, paginator, sample data.
"""
