"""Tests for the Work Hours integration."""
