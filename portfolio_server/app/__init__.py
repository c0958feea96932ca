"""
Application package.

``main`` assembles the FastAPI application, ``core`` holds
configuration, logging and database plumbing, ``services`` the store
and upload logic and ``api`` the HTTP routes.  Nothing is imported
here so that using the store does not build the web application.
"""
