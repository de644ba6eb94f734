"""Shared fixtures for TFWhatsUp tests."""

import pytest

from versioning.models import ProviderRef, Release, ResolvedProvider
from versioning.parser import parse_version


LOCKFILE = '''# This file is maintained automatically by "terraform init".
# Manual edits may be lost in future updates.

provider "registry.terraform.io/hashicorp/azurerm" {
  version     = "3.0.0"
  constraints = "~> 3.0"
  hashes = [
    "h1:abc=",
    "zh:def",
  ]
}

provider "registry.terraform.io/hashicorp/random" {
  version = "3.4.3"
}
'''

MAIN_TF = '''
resource "azurerm_storage_account" "main" {
  name = "examplestorage"
}

resource "azurerm_resource_group" "rg" {
  name     = "example"
  location = "westeurope"
}

data "azurerm_client_config" "current" {}
'''


@pytest.fixture
def lockfile_text():
    return LOCKFILE


@pytest.fixture
def main_tf_text():
    return MAIN_TF


def make_release(tag, body="", created_at=None):
    """Build a Release from a tag; the tag must be a valid version."""
    return Release(tag_name=tag, version=parse_version(tag), created_at=created_at, body=body)


@pytest.fixture
def resolved_azurerm():
    ref = ProviderRef(vendor="hashicorp", name="azurerm", pinned_version="3.0.0")
    return ResolvedProvider(ref=ref, repo_org="hashicorp", repo_name="terraform-provider-azurerm")
