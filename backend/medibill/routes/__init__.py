# Overview: Blueprints for the login flow and the protected application shell.
