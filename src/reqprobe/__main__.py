# SPDX-FileCopyrightText: 2025 reqprobe contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

from .cli.main import main

raise SystemExit(main())
