"""Declarative GitHub repositories and governance policies for the powerd6 organization."""
