"""
Task modules used by the discovery tests.

Visible: hello, javac. Internal (never discovered): core, utils.
"""
