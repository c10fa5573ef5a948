"""
                Food Ordering Service

In-memory backend for an online food-ordering application: customers
browse the menu, keep a cart and place orders; administrators manage the
menu and drive order fulfillment.

Author: Khalil_Bannouri
Version: 3.1.0
License: MIT
"""

__version__ = "3.1.0"
__author__ = "Khalil_Bannouri"
