"""
Deploy a Firebase Hosting site to a preview channel or the live site from
GitHub Actions and report the result on the pull request.
"""

__version__ = "0.1.0"
