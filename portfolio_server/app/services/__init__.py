"""
Service layer.

``portfolio_store`` holds the persistence logic, ``seed_loader`` the
tolerant parsing of the seed document and ``upload_service`` the
handling of uploaded images.  API handlers only talk to these modules.
"""
