"""
ShiftPay workforce backend
"""
