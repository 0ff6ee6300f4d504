"""DishOut: snap a dish, find who serves it nearby, order over WhatsApp."""
