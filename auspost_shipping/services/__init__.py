# Services layer: carrier API client and host-facing plugin
