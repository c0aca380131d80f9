# coding=utf-8
# SPDX-License-Identifier: Apache-2.0
"""
Build-time patches for the naive-ui icon vnode reference leak.
"""
