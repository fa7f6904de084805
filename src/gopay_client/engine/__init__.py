"""
Business flows on top of the API operations: payment controller, session
guard, presentation event hooks and the shared error taxonomy.
"""
