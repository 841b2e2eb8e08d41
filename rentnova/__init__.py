"""
RentNova property recommendation service.

Scores rental listings against renter preferences, ranks them against
free-text location searches, and serves both over a small FastAPI app.
"""
