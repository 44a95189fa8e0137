"""Worked answers to a number of the exercises, written in Python."""