"""Niribar - a niri state mirror for status bars.

Listens to the niri compositor event stream, keeps a flat model of the
workspaces and windows up to date and prints, for every event, a JSON
document grouping them by output. Meant to be consumed by widget renderers
such as eww (`deflisten`) or waybar custom modules.
"""
