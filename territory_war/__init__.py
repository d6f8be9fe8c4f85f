"""
Territory War: single-player territory conquest with secret missions.
"""
