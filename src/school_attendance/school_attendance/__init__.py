"""School Attendance package.

Feature modules (students, roster, attendance, recap, users, audit) with a
thin Flask controller layer over service/repository layers.
"""
