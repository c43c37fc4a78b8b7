# Overview: Service layer; each module owns one concern of the authorization core.
