"""
Team subsystem.

- qualifications.py: read-only registry of task types, qualified members and profiles
- assigner.py: least-workload member selection
"""
