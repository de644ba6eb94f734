"""Terraform lock file and configuration extraction."""
