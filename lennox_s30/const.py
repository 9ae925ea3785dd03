"""Wire constants for the Lennox S30/S40/E30/M30 cloud API."""

from __future__ import annotations

from typing import Final

# -----------------------------------------------------------------------------
# Cloud endpoints
# -----------------------------------------------------------------------------

CLOUD_AUTHENTICATE_URL: Final = (
    "https://ic3messaging.myicomfort.com/v1/mobile/authenticate"
)
CLOUD_LOGIN_URL: Final = "https://ic3messaging.myicomfort.com/v2/user/login"
CLOUD_RETRIEVE_URL: Final = (
    "https://icretrieveapi.myicomfort.com/v1/messages/retrieve"
)
CLOUD_REQUESTDATA_URL: Final = (
    "https://icrequestdataapi.myicomfort.com/v1/Messages/RequestData"
)
CLOUD_PUBLISH_URL: Final = "https://icpublishapi.myicomfort.com/v1/messages/publish"

# Mobile app identity expected by the cloud
USER_AGENT: Final = "lx_ic3_mobile_appstore/3.75.218 (iPad; iOS 14.4.1; Scale/2.00)"
DEFAULT_CLOUD_APP_ID: Final = "mapp079372367644467046827001"

# Client certificate exchanged for a certificate token (opaque PKCS#12 blob)
CERTIFICATE: Final = (
    "MIIKXAIBAzCCChgGCSqGSIb3DQEHAaCCCgkEggoFMIIKATCCBfoGCSqGSIb3DQEHAaCCBesE"
    "ggXnMIIF4zCCBd8GCyqGSIb3DQEMCgECoIIE/jCCBPowHAYKKoZIhvcNAQwBAzAOBAhvt2dV"
    "YDpuhgICB9AEggTYM43UVALue2O5a2GqZ6xPFv1ZOGby+M3I/TOYyVwHDBR+UAYNontMWLvU"
    "f6xE/3+GUj/3lBcXk/0erw7iQXa/t9q9b8Xk2r7FFuf+XcWvbXcvcPG0uP74Zx7Fj8HcMmD0"
    "/8NNcH23JnoHiWLaa1walfjZG6fZtrOjx4OmV6oYMdkRZm9tP5FuJenPIwdDFx5dEKiWdjdJ"
    "W0lRl7jWpvbU63gragLBHFqtkCSRCQVlUALtO9Uc2W+MYwh658HrbWGsauLKXABuHjWCK8fi"
    "Lm1Tc6cuNP/hUF+j3kxt2tkXIYlMhWxEAOUicC0m8wBtJJVCDQQLzwN5PebGGXiq04F40IUO"
    "ccl9RhaZ2PdWLChaqq+CNQdUZ1mDYcdfg5SVMmiMJayRAA7MWY/t4W53yTU0WXCPu3mg0WPh"
    "uRUuphaKdyBgOlmBNrXq/uXjcXgTPqKAKHsph3o6K2TWcPdRBswwc6YJ88J21bLD83fT+LkE"
    "mCSldPz+nvLIuQIDZcFnTdUJ8MZRh+QMQgRibyjQwBg02XoEVFg9TJenXVtYHN0Jpvr5Bvd8"
    "FDMHGW/4kPM4mODo0PfvHj9wgqMMgTqiih8LfmuJQm30BtqRNm3wHCW1wZ0bbVqefvRSUy82"
    "LOxQ9443zjzSrBf7/cFk+03iNn6t3s65ubzuW7syo4lnXwm3DYVR32wo/WmpZVJ3NLeWgypG"
    "jNA7MaSwZqUas5lY1EbxLXM5WLSXVUyCqGCdKYFUUKDMahZ6xqqlHUuFj6T49HNWXE7lAdSA"
    "Oq7yoThMYUVvjkibKkji1p1TIAtXPDPVgSMSsWG1aJilrpZsRuipFRLDmOmbeanS+TvX5ctT"
    "a1px/wSeHuAYD/t+yeIlZriajAk62p2ZGENRPIBCbLxx1kViXJBOSgEQc8ItnBisti5N9gjO"
    "YoZT3hoONd/IalOxcVU9eBTuvMoVCPMTxYvSz6EUaJRoINS6yWfzriEummAuH6mqENWatudl"
    "qKzNAH4RujRetKdvToTddIAGYDJdptzzPIu8OlsmZWTv9HxxUEGYXdyqVYDJkY8dfwB1fsa9"
    "vlV3H7IBMjx+nG4ESMwi7UYdhFNoBa7bLD4P1yMQdXPGUs1atFHmPrXYGf2kIdvtHiZ149E9"
    "ltxHjRsEaXdhcoyiDVdraxM2H46Y8EZNhdCFUTr2vMau3K/GcU5QMyzY0Z1qD7lajQaBIMGJ"
    "RZQ6xBnQAxkd4xU1RxXOIRkPPiajExENuE9v9sDujKAddJxvNgBp0e8jljt7ztSZ+QoMbleJ"
    "x7m9s3sqGvPK0eREzsn/2aQBA+W3FVe953f0Bk09nC6CKi7QwM4uTY9x2IWh/nsKPFSD0ElX"
    "lJzJ3jWtLpkpwNL4a8CaBAFPBB2QhRf5bi52KxaAD0TXvQPHsaTPhmUN827smTLoW3lbOmsh"
    "k4ve1dPAyKPl4/tHvto/EGlYnQf0zjs6BATu/4pJFJz+n0duyF1y/F/elBDXPclJvfyZhEFT"
    "99txYsSm2GUijXKOHW/sjMalQctiAyg8Y5CzrOJUhKkB/FhaN5wjJLFz7ZCEJBV7Plm3aNPe"
    "gariTkLCgkFZrFvrIppvRKjR41suXKP/WhdWhu0Ltb+QgC+8OQTC8INq3v1fdDxT2HKNShVT"
    "SubmrUniBuF5MDGBzTATBgkqhkiG9w0BCRUxBgQEAQAAADBXBgkqhkiG9w0BCRQxSh5IADAA"
    "NgAyAGQANQA5ADMANQAtADYAMAA5AGUALQA0ADYAMgA2AC0AOQA2ADUAZAAtADcAMwBlAGQA"
    "MQAwAGUAYwAzAGYAYgA4MF0GCSsGAQQBgjcRATFQHk4ATQBpAGMAcgBvAHMAbwBmAHQAIABT"
    "AHQAcgBvAG4AZwAgAEMAcgB5AHAAdABvAGcAcgBhAHAAaABpAGMAIABQAHIAbwB2AGkAZABl"
    "AHIwggP/BgkqhkiG9w0BBwagggPwMIID7AIBADCCA+UGCSqGSIb3DQEHATAcBgoqhkiG9w0B"
    "DAEGMA4ECFK0DO//E1DsAgIH0ICCA7genbD4j1Y4WYXkuFXxnvvlNmFsw3qPiHn99RVfc+QF"
    "jaMvTEqk7BlEBMduOopxUAozoDAv0o+no/LNIgKRXdHZW3i0GPbmoj2WjZJW5T6Z0QVlS5Yl"
    "QgvbSKVee51grg6nyjXymWgEmrzVldDxy/MfhsxNQUfaLm3awnziFb0l6/m9SHj2eZfdB4HO"
    "r2r9BXA6oSQ+8tbGHT3dPnCVAUMjht1MNo6u7wTRXIUYMVn+Aj/xyF9uzDRe404yyenNDPqW"
    "rVLoP+Nzssocoi+U+WUFCKMBdVXbM/3GYAuxXV+EHAgvVWcP4deC9ukNPJIdA8gtfTH0Bjez"
    "wrw+s+nUy72ROBzfQl9t/FHzVfIZput5GcgeiVppQzaXZMBu/LIIQ9u/1Q7xMHd+WsmNsMlV"
    "6eekdO4wcCIo/mM+k6Yukf2o8OGjf1TRwbpt3OH8ID5YRIy848GT49JYRbhNiUetYf5s8cPg"
    "lk/Q4E2oyNN0LuhTAJtXOH2Gt7LsDVxCDwCA+mUJz1SPAVMVY8hz/h8l4B6sXkwOz3YNe/IL"
    "AFncS2o+vD3bxZrYec6TqN+fdkLf1PeKH62YjbFweGR1HLq7R1nD76jinE3+lRZZrfOFWaPM"
    "BcGroWOVS0ix0h5r8+lM6n+/hfOS8YTF5Uy++AngQR18IJqT7+SmnLuENgyG/9V53Z7q7BwD"
    "o7JArx7tosmxmztcubNCbLFFfzx7KBCIjU1PjFTAtdNYDho0CG8QDfvSQHz9SzLYnQXXWLKR"
    "seEGQCW59JnJVXW911FRt4Mnrh5PmLMoaxbf43tBR2xdmaCIcZgAVSjV3sOCfJgja6mKFsb7"
    "puzYRBLqYkfQQdOlrnHHrLSkjaqyQFBbpfROkRYo9sRejPMFMbw/Orreo+7YELa+ZoOpS/yZ"
    "AONgQZ6tlZ4VR9TI5LeLH5JnnkpzpRvHoNkWUtKA+YHqY5Fva3e3iV82O4BwwmJdFXP2RiRQ"
    "DJYVDzUe5KuurMgduHjqnh8r8238pi5iRZOKlrR7YSBdRXEU9R5dx+i4kv0xqoXKcQdMflE+"
    "X4YMd7+BpCFS3ilgbb6q1DuVIN5Bnayyeeuij7sR7jk0z6hV8lt8FZ/Eb+Sp0VB4NeXgLbvl"
    "WVuq6k+0ghZkaC1YMzXrfM7N+jy2k1L4FqpO/PdvPRXiA7uiH7JsagI0Uf1xbjA3wbCj3nEi"
    "3H/xoyWXgWh2P57m1rxjW1earoyc1CWkRgZLnNc1lNTWVA6ghCSMbCh7T79Fr5GEY2zNcOiq"
    "LHS3MDswHzAHBgUrDgMCGgQU0GYHy2BCdSQK01QDvBRI797NPvkEFBwzcxzJdqixLTllqxfI"
    "9EJ3KSBwAgIH0A=="
)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_POLL_INTERVAL: Final = 10.0
DEFAULT_FAST_POLL_INTERVAL: Final = 1.0
DEFAULT_REQUEST_TIMEOUT: Final = 60.0
DEFAULT_TOKEN_REFRESH_BUFFER: Final = 300
DEFAULT_MAX_CONSECUTIVE_ERRORS: Final = 5
DEFAULT_MESSAGE_COUNT: Final = 10
DEFAULT_INITIALIZE_TIMEOUT: Final = 30.0
DEFAULT_AUTH_RETRIES: Final = 5

# Manual-mode schedules are numbered from this id, one per zone index
MANUAL_MODE_SCHEDULE_BASE: Final = 16

# -----------------------------------------------------------------------------
# Subscription paths
# -----------------------------------------------------------------------------

SYSTEM_DATA_PATH: Final = (
    "1;/systemControl;/systemController;/reminderSensors;/reminders;"
    "/alerts/active;/alerts/meta;/devices;/zones;/equipments;/schedules;"
    "/occupancy;/system"
)
HOME_DATA_PATH: Final = "1;/homes;/interfaces"

# -----------------------------------------------------------------------------
# Message types
# -----------------------------------------------------------------------------

MESSAGE_TYPE_REQUEST_DATA: Final = "RequestData"
MESSAGE_TYPE_COMMAND: Final = "Command"
MESSAGE_TYPE_PROPERTY_CHANGE: Final = "PropertyChange"

# -----------------------------------------------------------------------------
# Modes and states
# -----------------------------------------------------------------------------

HVAC_MODE_OFF: Final = "off"
HVAC_MODE_HEAT: Final = "heat"
HVAC_MODE_COOL: Final = "cool"
HVAC_MODE_HEAT_COOL: Final = "heat and cool"
HVAC_MODE_EMERGENCY_HEAT: Final = "emergency heat"

HVAC_MODES: Final = frozenset(
    {
        HVAC_MODE_OFF,
        HVAC_MODE_HEAT,
        HVAC_MODE_COOL,
        HVAC_MODE_HEAT_COOL,
        HVAC_MODE_EMERGENCY_HEAT,
    }
)

FAN_MODE_AUTO: Final = "auto"
FAN_MODE_ON: Final = "on"
FAN_MODE_CIRCULATE: Final = "circulate"

FAN_MODES: Final = frozenset({FAN_MODE_AUTO, FAN_MODE_ON, FAN_MODE_CIRCULATE})

TEMP_OPERATION_OFF: Final = "off"
TEMP_OPERATION_HEATING: Final = "heating"
TEMP_OPERATION_COOLING: Final = "cooling"

STATUS_GOOD: Final = "good"
STATUS_NOT_AVAILABLE: Final = "not_available"
STATUS_NOT_EXIST: Final = "not_exist"

BAD_STATUSES: Final = frozenset({STATUS_NOT_AVAILABLE, STATUS_NOT_EXIST})
