from . import discovery, health, pantry, shopping

blueprints = [health.bp, discovery.bp, pantry.bp, shopping.bp]
