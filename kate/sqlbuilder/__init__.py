"""Builders for SQL statements and their associated arguments."""